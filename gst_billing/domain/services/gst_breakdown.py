# gst_billing/domain/services/gst_breakdown.py
"""
GST breakdowns of a computed invoice.

Two independent groupings are produced and never merged:

* compliance buckets, keyed by (combined rate, intra/inter, HSN), stored in
  the compliance record as ``rate:taxable:total_tax`` entries joined by ``,``;
* display buckets, keyed by combined rate including cess, shown on the
  invoice summary in ascending rate order.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal

from gst_billing.domain.models.invoice import (
    GSTRateBreakdown,
    GSTRateBreakdownItem,
    HSNSummary,
    Invoice,
    InvoiceGSTDetails,
    InvoiceGSTSummary,
    InvoiceLineItem,
)
from gst_billing.domain.services.money import PAISE, ZERO, round_money, to_decimal
from gst_billing.domain.services.tax_rate_defaults import default_hsn_rates

logger = logging.getLogger("gst_breakdown")

_ENTRY_SEP = ","
_FIELD_SEP = ":"


def _fmt(value: Decimal) -> str:
    return str(round_money(value))


# ---------------------------------------------------------------------------
# Compliance grouping
# ---------------------------------------------------------------------------

def build_compliance_breakdown(
    line_items: list[InvoiceLineItem],
    is_interstate: bool,
) -> list[GSTRateBreakdown]:
    """Group lines by (cgst+sgst+igst rate, intrastate flag, HSN) in first-seen order."""
    buckets: dict[tuple[Decimal, bool, str | None], GSTRateBreakdown] = {}
    is_intrastate = not is_interstate

    for line in line_items:
        key = (line.combined_rate, is_intrastate, line.hsn_code)
        bucket = buckets.get(key)
        if bucket is None:
            buckets[key] = GSTRateBreakdown(
                gst_rate=line.combined_rate,
                is_intrastate=is_intrastate,
                hsn_code=line.hsn_code,
                taxable_amount=line.taxable_amount,
                cgst_amount=line.cgst_amount,
                sgst_amount=line.sgst_amount,
                igst_amount=line.igst_amount,
                cess_amount=line.cess_amount,
                total_gst_amount=line.total_gst_amount,
            )
            continue
        buckets[key] = bucket.model_copy(update={
            "taxable_amount": bucket.taxable_amount + line.taxable_amount,
            "cgst_amount": bucket.cgst_amount + line.cgst_amount,
            "sgst_amount": bucket.sgst_amount + line.sgst_amount,
            "igst_amount": bucket.igst_amount + line.igst_amount,
            "cess_amount": bucket.cess_amount + line.cess_amount,
            "total_gst_amount": bucket.total_gst_amount + line.total_gst_amount,
        })

    return list(buckets.values())


def serialize_rate_breakdown(breakdown: list[GSTRateBreakdown]) -> str:
    """``[18% on 10000 / 1800 tax]`` -> ``"18.00:10000.00:1800.00"``."""
    return _ENTRY_SEP.join(
        _FIELD_SEP.join((
            str(item.gst_rate.quantize(PAISE)),
            _fmt(item.taxable_amount),
            _fmt(item.total_gst_amount),
        ))
        for item in breakdown
    )


def parse_rate_breakdown(raw: str | None) -> list[tuple[Decimal, Decimal, Decimal]]:
    """
    Inverse of :func:`serialize_rate_breakdown`.

    Returns ``(rate, taxable, total_tax)`` triples. Malformed entries are
    skipped with a warning so an old record never blocks a reprint.
    """
    if not raw:
        return []

    entries: list[tuple[Decimal, Decimal, Decimal]] = []
    for chunk in raw.split(_ENTRY_SEP):
        parts = chunk.strip().split(_FIELD_SEP)
        if len(parts) != 3:
            logger.warning("Skipping malformed breakdown entry %r", chunk)
            continue
        try:
            rate, taxable, tax = (to_decimal(p) for p in parts)
        except ArithmeticError:
            logger.warning("Skipping non-numeric breakdown entry %r", chunk)
            continue
        entries.append((rate, taxable, tax))
    return entries


# ---------------------------------------------------------------------------
# Display grouping
# ---------------------------------------------------------------------------

def build_display_breakdown(line_items: list[InvoiceLineItem]) -> list[GSTRateBreakdownItem]:
    """Group lines by combined rate including cess, ascending by rate."""
    groups: dict[Decimal, dict] = {}

    for line in line_items:
        rate = line.combined_rate + line.cess_rate
        group = groups.setdefault(rate, {
            "taxable_amount": ZERO,
            "cgst_amount": ZERO,
            "sgst_amount": ZERO,
            "igst_amount": ZERO,
            "cess_amount": ZERO,
            "total_amount": ZERO,
            "hsn_codes": [],
        })
        group["taxable_amount"] += line.taxable_amount
        group["cgst_amount"] += line.cgst_amount
        group["sgst_amount"] += line.sgst_amount
        group["igst_amount"] += line.igst_amount
        group["cess_amount"] += line.cess_amount
        group["total_amount"] += line.line_total
        if line.hsn_code and line.hsn_code not in group["hsn_codes"]:
            group["hsn_codes"].append(line.hsn_code)

    return [
        GSTRateBreakdownItem(gst_rate=rate, **groups[rate])
        for rate in sorted(groups)
    ]


# ---------------------------------------------------------------------------
# HSN summary
# ---------------------------------------------------------------------------

def build_hsn_summary(line_items: list[InvoiceLineItem]) -> list[HSNSummary]:
    """Per-HSN totals for lines that carry an HSN code."""
    known = default_hsn_rates()
    summary: dict[str, HSNSummary] = {}

    for line in line_items:
        if not line.hsn_code:
            continue
        row = summary.get(line.hsn_code)
        if row is None:
            default = known.get(line.hsn_code)
            summary[line.hsn_code] = HSNSummary(
                hsn_code=line.hsn_code,
                description=default.description if default else line.product_description,
                quantity=line.quantity,
                gst_rate=line.effective_rate,
                taxable_value=line.taxable_amount,
                cgst_amount=line.cgst_amount,
                sgst_amount=line.sgst_amount,
                igst_amount=line.igst_amount,
                cess_amount=line.cess_amount,
            )
            continue
        summary[line.hsn_code] = row.model_copy(update={
            "quantity": row.quantity + line.quantity,
            "taxable_value": row.taxable_value + line.taxable_amount,
            "cgst_amount": row.cgst_amount + line.cgst_amount,
            "sgst_amount": row.sgst_amount + line.sgst_amount,
            "igst_amount": row.igst_amount + line.igst_amount,
            "cess_amount": row.cess_amount + line.cess_amount,
        })

    return list(summary.values())


# ---------------------------------------------------------------------------
# Records built from a finished invoice
# ---------------------------------------------------------------------------

def create_invoice_gst_details(
    invoice: Invoice,
    line_items: list[InvoiceLineItem],
) -> InvoiceGSTDetails:
    """Compliance snapshot of a taxed invoice."""
    breakdown = build_compliance_breakdown(line_items, invoice.is_interstate)
    hsn_rows = build_hsn_summary(line_items)

    return InvoiceGSTDetails(
        transaction_id=invoice.transaction_id,
        invoice_number=invoice.invoice_number,
        gst_mode=invoice.gst_mode,
        is_interstate=invoice.is_interstate,
        shop_gstin=invoice.shop_gstin,
        customer_gstin=invoice.customer_gstin,
        taxable_amount=invoice.taxable_amount,
        cgst_amount=invoice.cgst_amount,
        sgst_amount=invoice.sgst_amount,
        igst_amount=invoice.igst_amount,
        cess_amount=invoice.cess_amount,
        total_gst_amount=invoice.total_gst_amount,
        round_off_amount=invoice.round_off_amount,
        gst_rate_breakdown=serialize_rate_breakdown(breakdown),
        hsn_summary=json.dumps([row.model_dump(mode="json") for row in hsn_rows]),
        created_at=invoice.created_at,
    )


def generate_gst_summary(invoice: Invoice, line_items: list[InvoiceLineItem]) -> InvoiceGSTSummary:
    """Customer-facing summary block for the invoice footer."""
    return InvoiceGSTSummary(
        subtotal=invoice.subtotal_amount,
        discount_amount=invoice.discount_amount,
        taxable_amount=invoice.taxable_amount,
        cgst_amount=invoice.cgst_amount,
        sgst_amount=invoice.sgst_amount,
        igst_amount=invoice.igst_amount,
        cess_amount=invoice.cess_amount,
        total_gst_amount=invoice.total_gst_amount,
        round_off_amount=invoice.round_off_amount,
        grand_total=invoice.grand_total,
        is_interstate=invoice.is_interstate,
        gst_breakdown=build_display_breakdown(line_items),
    )
