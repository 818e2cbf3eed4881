# gst_billing/domain/services/tax_rate_defaults.py
"""
Hardcoded GST rate fallback.

Used by the static rate lookup when a product has no rate of its own, and as
the source of HSN descriptions for the HSN summary.
"""

from __future__ import annotations

from decimal import Decimal

from gst_billing.domain.models.gst import CATEGORY_RATES, GSTRate, GSTRateCategory

_CATEGORY_DESCRIPTIONS: dict[GSTRateCategory, str] = {
    GSTRateCategory.EXEMPT: "Exempt supplies",
    GSTRateCategory.GST_5: "Essential goods",
    GSTRateCategory.GST_12: "Standard goods",
    GSTRateCategory.GST_18: "Standard rate",
    GSTRateCategory.GST_28: "Luxury and sin goods",
    GSTRateCategory.CUSTOM: "Custom rate",
}


def default_category_rate(category: GSTRateCategory | str) -> GSTRate:
    """Return the hardcoded GSTRate for a rate category (unknown names map to CUSTOM)."""
    try:
        cat = GSTRateCategory(category)
    except ValueError:
        cat = GSTRateCategory.CUSTOM
    return GSTRate.from_total(
        CATEGORY_RATES[cat],
        category=cat.value,
        description=_CATEGORY_DESCRIPTIONS[cat],
    )


def default_hsn_rates() -> dict[str, GSTRate]:
    """HSN code -> rate for the product lines a mobile shop typically sells."""
    rates = [
        GSTRate.from_total(Decimal("18"), category="Mobile Phones", hsn_code="8517",
                           description="Mobile Phones"),
        GSTRate.from_total(Decimal("18"), category="Mobile Accessories", hsn_code="8544",
                           description="Mobile Accessories"),
        GSTRate.from_total(Decimal("12"), category="Mobile Cases & Covers", hsn_code="3926",
                           description="Mobile Cases & Covers"),
    ]
    return {rate.hsn_code: rate for rate in rates}
