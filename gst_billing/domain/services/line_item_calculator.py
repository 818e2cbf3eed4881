# gst_billing/domain/services/line_item_calculator.py
"""
Per-line tax computation.

Each component (CGST, SGST, IGST, cess) is rounded to paise on its own before
the components are summed, so the invoice totals are sums of printed figures.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from gst_billing.domain.models.gst import GSTRate
from gst_billing.domain.models.invoice import InvoiceLineItem, InvoiceLineItemRequest
from gst_billing.domain.services.money import ZERO, percent_of, round_money

_NO_RATE = Decimal("0")


@dataclass(frozen=True)
class GSTAmounts:
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    cess: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.cgst + self.sgst + self.igst + self.cess


@dataclass(frozen=True)
class AppliedRates:
    cgst: Decimal = _NO_RATE
    sgst: Decimal = _NO_RATE
    igst: Decimal = _NO_RATE
    cess: Decimal = _NO_RATE


def compute_line_subtotal(request: InvoiceLineItemRequest) -> Decimal:
    return round_money(request.quantity * request.unit_price)


def compute_line_discount(request: InvoiceLineItemRequest, line_subtotal: Decimal) -> Decimal:
    """Percentage discount wins over the absolute amount when both are given."""
    if request.discount_percentage > 0:
        return percent_of(line_subtotal, request.discount_percentage)
    return round_money(request.discount_amount)


def applied_rates(rate: GSTRate | None, is_interstate: bool) -> AppliedRates:
    """Only the components that are actually charged; the others stay at 0."""
    if rate is None:
        return AppliedRates()
    if is_interstate:
        return AppliedRates(igst=rate.igst_rate, cess=rate.cess_rate)
    return AppliedRates(cgst=rate.cgst_rate, sgst=rate.sgst_rate, cess=rate.cess_rate)


def calculate_gst_amounts(
    taxable_amount: Decimal,
    rate: GSTRate | None,
    is_interstate: bool,
) -> GSTAmounts:
    if rate is None:
        return GSTAmounts()

    rates = applied_rates(rate, is_interstate)
    if is_interstate:
        return GSTAmounts(
            igst=percent_of(taxable_amount, rates.igst),
            cess=percent_of(taxable_amount, rates.cess),
        )
    return GSTAmounts(
        cgst=percent_of(taxable_amount, rates.cgst),
        sgst=percent_of(taxable_amount, rates.sgst),
        cess=percent_of(taxable_amount, rates.cess),
    )


def calculate_line_item(
    request: InvoiceLineItemRequest,
    *,
    rate: GSTRate | None,
    is_interstate: bool,
    global_discount_share: Decimal = ZERO,
) -> InvoiceLineItem:
    """
    Compute one invoice line.

    ``rate`` must already be ``None`` when the invoice's mode does not charge
    tax; this function does not look at the mode.
    """
    line_subtotal = compute_line_subtotal(request)
    own_discount = compute_line_discount(request, line_subtotal)
    discount_amount = own_discount + global_discount_share
    taxable_amount = line_subtotal - discount_amount

    amounts = calculate_gst_amounts(taxable_amount, rate, is_interstate)
    rates = applied_rates(rate, is_interstate)

    return InvoiceLineItem(
        product_id=request.product_id,
        product_name=request.product_name,
        product_description=request.product_description,
        hsn_code=request.hsn_code,
        unit_of_measure=request.unit_of_measure,
        quantity=request.quantity,
        unit_price=request.unit_price,
        line_subtotal=line_subtotal,
        discount_amount=discount_amount,
        global_discount_share=global_discount_share,
        discount_percentage=request.discount_percentage,
        taxable_amount=taxable_amount,
        gst_rate_id=rate.rate_id if rate is not None else None,
        cgst_rate=rates.cgst,
        sgst_rate=rates.sgst,
        igst_rate=rates.igst,
        cess_rate=rates.cess,
        cgst_amount=amounts.cgst,
        sgst_amount=amounts.sgst,
        igst_amount=amounts.igst,
        cess_amount=amounts.cess,
        total_gst_amount=amounts.total,
        line_total=taxable_amount + amounts.total,
        imei_serial=request.imei_serial,
        batch_number=request.batch_number,
        warranty_period=request.warranty_period,
    )
