# gst_billing/api/v1/routes/invoices.py
"""
Invoice endpoints: build a complete invoice, or just its GST summary.

Nothing is persisted; the caller stores the returned invoice.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from gst_billing.api.v1.deps import get_billing_service
from gst_billing.api.v1.envelope import ok
from gst_billing.api.v1.schemas.invoices import InvoiceSummaryResponse
from gst_billing.domain.models.invoice import InvoiceRequest, InvoiceWithDetails
from gst_billing.domain.services.billing_service import (
    BillingService,
    GSTConfigurationNotFoundError,
    NegativeTaxableAmountError,
    validate_calculation,
)

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/invoices", tags=["Invoices"])


async def _build(body: InvoiceRequest, service: BillingService) -> InvoiceWithDetails:
    try:
        return await service.build_invoice(body)
    except GSTConfigurationNotFoundError as exc:
        logger.error("Invoice build for transaction %s failed: %s", body.transaction_id, exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    except NegativeTaxableAmountError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/build", response_model=dict)
async def build_invoice(
    body: InvoiceRequest,
    service: BillingService = Depends(get_billing_service),
):
    """Compute a full invoice (lines, totals, compliance record) from a draft order."""
    result = await _build(body, service)
    return ok(data=result.model_dump(mode="json"))


@router.post("/summary", response_model=dict)
async def invoice_summary(
    body: InvoiceRequest,
    service: BillingService = Depends(get_billing_service),
):
    """Build the invoice and return only the customer-facing GST summary."""
    result = await _build(body, service)
    resp = InvoiceSummaryResponse(
        invoice_number=result.invoice.invoice_number,
        gst_mode=result.invoice.gst_mode.value,
        show_gst_summary=result.invoice.show_gst_summary,
        summary=service.generate_gst_summary(result),
        problems=validate_calculation(result),
        warnings=result.warnings,
    )
    return ok(data=resp.model_dump(mode="json"))
