# gst_billing/api/v1/routes/gstin.py
"""GSTIN lookup: structural validation plus the state and PAN it encodes."""

from __future__ import annotations

from fastapi import APIRouter, Query

from gst_billing.api.v1.envelope import ok
from gst_billing.api.v1.schemas.invoices import GSTINCheckResponse
from gst_billing.config.settings import settings
from gst_billing.domain.services.gstin_validation import validate_gstin_with_details

router = APIRouter(prefix="/gstin", tags=["GSTIN"])


@router.get("/{gstin}", response_model=dict)
async def check_gstin(gstin: str, strict: bool | None = Query(default=None)):
    """
    Validate a GSTIN. An invalid GSTIN is still a 200 with ``is_valid=false``.

    ``strict`` enables the check-character test; it defaults to the
    ``STRICT_GSTIN_CHECKSUM`` setting.
    """
    use_strict = settings.STRICT_GSTIN_CHECKSUM if strict is None else strict
    result = validate_gstin_with_details(gstin, strict=use_strict)
    resp = GSTINCheckResponse(
        gstin=result.clean_gstin or gstin,
        is_valid=result.is_valid,
        error_message=result.error_message,
        state_code=result.state_code,
        state_name=result.state_name,
        pan_number=result.pan_number,
        formatted_gstin=result.formatted_gstin,
    )
    message = None if result.is_valid else result.error_message
    return ok(data=resp.model_dump(), message=message)
