# gst_billing/domain/services/inclusive_pricing.py
"""
GST-inclusive <-> GST-exclusive price conversion.

Standalone helpers for pricing work outside the invoice pipeline, such as
working back from an MRP-style price that already contains GST. The build
pipeline always treats unit prices as GST-exclusive.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from gst_billing.domain.services.money import HUNDRED, PAISE, ZERO, round_money

_FACTOR_PLACES = Decimal("0.0001")


def _factor(gst_rate: Decimal) -> Decimal:
    return Decimal("1") + (Decimal(gst_rate) / HUNDRED).quantize(_FACTOR_PLACES, rounding=ROUND_HALF_UP)


def convert_to_inclusive(exclusive_price: Decimal, gst_rate: Decimal) -> Decimal:
    return round_money(exclusive_price * _factor(gst_rate))


def convert_to_exclusive(inclusive_price: Decimal, gst_rate: Decimal) -> Decimal:
    return round_money(inclusive_price / _factor(gst_rate))


def extract_gst_from_inclusive(inclusive_price: Decimal, gst_rate: Decimal) -> Decimal:
    return round_money(inclusive_price - convert_to_exclusive(inclusive_price, gst_rate))


def profit_with_inclusive(cost_price: Decimal, inclusive_selling_price: Decimal, gst_rate: Decimal) -> Decimal:
    """Margin left after GST is taken out of the selling price."""
    return round_money(convert_to_exclusive(inclusive_selling_price, gst_rate) - cost_price)


def suggest_inclusive_price(cost_price: Decimal, desired_profit_pct: Decimal, gst_rate: Decimal) -> Decimal:
    exclusive = cost_price * _factor(desired_profit_pct)
    return convert_to_inclusive(exclusive, gst_rate)


@dataclass(frozen=True)
class InclusiveBreakdown:
    taxable_value: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    total_gst: Decimal
    total_amount: Decimal


def inclusive_breakdown(
    inclusive_price: Decimal,
    quantity: Decimal,
    gst_rate: Decimal,
    is_interstate: bool = False,
) -> InclusiveBreakdown:
    """
    Split an inclusive line total into taxable value and GST components.

    For intrastate lines CGST is half the GST rounded half-up and SGST is the
    remainder, so ``cgst + sgst == total_gst``.
    """
    total_inclusive = round_money(inclusive_price * quantity)
    taxable = convert_to_exclusive(total_inclusive, gst_rate)
    total_gst = round_money(total_inclusive - taxable)

    if is_interstate:
        return InclusiveBreakdown(
            taxable_value=taxable,
            cgst=ZERO,
            sgst=ZERO,
            igst=total_gst,
            total_gst=total_gst,
            total_amount=total_inclusive,
        )

    cgst = (total_gst / 2).quantize(PAISE, rounding=ROUND_HALF_UP)
    return InclusiveBreakdown(
        taxable_value=taxable,
        cgst=cgst,
        sgst=total_gst - cgst,
        igst=ZERO,
        total_gst=total_gst,
        total_amount=total_inclusive,
    )
