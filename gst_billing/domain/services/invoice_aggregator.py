# gst_billing/domain/services/invoice_aggregator.py
"""
Invoice-level totals.

The global (bill-level) discount is spread over the lines before tax is
computed, so GST is always charged on the value actually billed. After
allocation, invoice taxable value equals the sum of line taxable values.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from gst_billing.domain.models.invoice import DiscountType, InvoiceLineItem
from gst_billing.domain.services.money import ZERO, money_sum, percent_of, round_money
from gst_billing.domain.services.rounding import apply_round_off

_RATE_PLACES = Decimal("0.01")


@dataclass
class InvoiceTotals:
    subtotal: Decimal = ZERO
    line_discount_amount: Decimal = ZERO
    global_discount_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    taxable_amount: Decimal = ZERO
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    cess_amount: Decimal = ZERO
    total_gst_amount: Decimal = ZERO
    round_off_amount: Decimal = ZERO
    grand_total: Decimal = ZERO

    @property
    def total_before_rounding(self) -> Decimal:
        return self.taxable_amount + self.total_gst_amount


def compute_global_discount(
    amount_after_line_discounts: Decimal,
    global_discount: Decimal,
    discount_type: DiscountType,
) -> Decimal:
    if discount_type is DiscountType.PERCENT:
        return percent_of(amount_after_line_discounts, global_discount)
    return round_money(global_discount)


def allocate_global_discount(bases: list[Decimal], global_discount: Decimal) -> list[Decimal]:
    """
    Split ``global_discount`` across lines in proportion to ``bases``.

    Shares are rounded to paise; the last line with a positive base absorbs
    the rounding remainder so the shares add up exactly. When nothing is
    eligible every share is zero.
    """
    shares = [ZERO for _ in bases]
    total = sum(bases, ZERO)
    if global_discount == 0 or total <= 0:
        return shares

    eligible = [i for i, base in enumerate(bases) if base > 0]
    last = eligible[-1]
    allocated = ZERO
    for i in eligible[:-1]:
        shares[i] = round_money(global_discount * bases[i] / total)
        allocated += shares[i]
    shares[last] = global_discount - allocated
    return shares


def calculate_invoice_totals(
    line_items: list[InvoiceLineItem],
    global_discount_amount: Decimal,
    round_off_gst: bool,
) -> InvoiceTotals:
    """
    Sum computed lines into invoice totals and apply the rounding policy.

    ``line_items`` already carry their share of the global discount inside
    ``discount_amount``; ``global_discount_amount`` is only used to report the
    split between line-level and bill-level discount.
    """
    subtotal = money_sum(line.line_subtotal for line in line_items)
    discount_amount = money_sum(line.discount_amount for line in line_items)
    line_discount_amount = discount_amount - global_discount_amount
    taxable_amount = subtotal - discount_amount

    cgst = money_sum(line.cgst_amount for line in line_items)
    sgst = money_sum(line.sgst_amount for line in line_items)
    igst = money_sum(line.igst_amount for line in line_items)
    cess = money_sum(line.cess_amount for line in line_items)
    total_gst = cgst + sgst + igst + cess

    grand_total, round_off = apply_round_off(taxable_amount + total_gst, round_off_gst)

    return InvoiceTotals(
        subtotal=subtotal,
        line_discount_amount=line_discount_amount,
        global_discount_amount=global_discount_amount,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        cgst_amount=cgst,
        sgst_amount=sgst,
        igst_amount=igst,
        cess_amount=cess,
        total_gst_amount=total_gst,
        round_off_amount=round_off,
        grand_total=grand_total,
    )


def calculate_weighted_average_rate(line_items: list[InvoiceLineItem]) -> Decimal:
    """
    Taxable-value-weighted effective rate; 0 when there is nothing taxable.

    Rounded to 2 places, then held within the lowest and highest rate of the
    lines that carry taxable value.
    """
    taxed = [line for line in line_items if line.taxable_amount != 0]
    total_taxable = sum((line.taxable_amount for line in taxed), ZERO)
    if total_taxable == 0:
        return Decimal("0.00")
    weighted = sum((line.taxable_amount * line.effective_rate for line in taxed), ZERO)
    rate = (weighted / total_taxable).quantize(_RATE_PLACES, rounding=ROUND_HALF_UP)
    lowest = min(line.effective_rate for line in taxed)
    highest = max(line.effective_rate for line in taxed)
    return min(max(rate, lowest), highest)
