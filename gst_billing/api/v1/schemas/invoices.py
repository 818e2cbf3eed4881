"""Response schemas for invoice endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from gst_billing.domain.models.invoice import InvoiceGSTSummary


class InvoiceSummaryResponse(BaseModel):
    """Display summary of a freshly built invoice plus consistency problems."""

    invoice_number: str
    gst_mode: str
    show_gst_summary: bool
    summary: InvoiceGSTSummary
    problems: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class GSTINCheckResponse(BaseModel):
    gstin: str
    is_valid: bool
    error_message: str | None = None
    state_code: str | None = None
    state_name: str | None = None
    pan_number: str | None = None
    formatted_gstin: str | None = None
