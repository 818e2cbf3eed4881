"""Tests for invoice totals, bill-level discount allocation and rounding."""

from decimal import Decimal

import pytest

from gst_billing.domain.models.gst import GSTRate
from gst_billing.domain.models.invoice import DiscountType, InvoiceLineItemRequest
from gst_billing.domain.services.invoice_aggregator import (
    allocate_global_discount,
    calculate_invoice_totals,
    calculate_weighted_average_rate,
    compute_global_discount,
)
from gst_billing.domain.services.line_item_calculator import calculate_line_item
from gst_billing.domain.services.rounding import apply_round_off


def _computed(price, rate, qty="1", share="0.00", interstate=False):
    req = InvoiceLineItemRequest(product_id=1, product_name="Item", quantity=Decimal(qty), unit_price=Decimal(price))
    return calculate_line_item(
        req,
        rate=GSTRate.from_total(rate) if rate is not None else None,
        is_interstate=interstate,
        global_discount_share=Decimal(share),
    )


class TestGlobalDiscount:

    def test_percent(self):
        assert compute_global_discount(Decimal("10000.00"), Decimal("10"), DiscountType.PERCENT) == Decimal("1000.00")

    def test_amount(self):
        assert compute_global_discount(Decimal("10000.00"), Decimal("150"), DiscountType.AMOUNT) == Decimal("150.00")

    def test_allocation_sums_exactly(self):
        shares = allocate_global_discount([Decimal("100"), Decimal("100"), Decimal("100")], Decimal("100.00"))
        assert shares == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
        assert sum(shares) == Decimal("100.00")

    def test_allocation_is_pro_rata(self):
        shares = allocate_global_discount([Decimal("3000"), Decimal("1000")], Decimal("400.00"))
        assert shares == [Decimal("300.00"), Decimal("100.00")]

    def test_zero_value_lines_get_nothing(self):
        shares = allocate_global_discount([Decimal("500"), Decimal("0")], Decimal("50.00"))
        assert shares == [Decimal("50.00"), Decimal("0.00")]

    def test_nothing_to_allocate(self):
        assert allocate_global_discount([], Decimal("0")) == []
        assert allocate_global_discount([Decimal("10")], Decimal("0")) == [Decimal("0.00")]


class TestInvoiceTotals:

    def test_totals_are_sums_of_lines(self):
        lines = [_computed("5000", 18, qty="2"), _computed("500", 12)]
        totals = calculate_invoice_totals(lines, Decimal("0.00"), round_off_gst=True)
        assert totals.subtotal == Decimal("10500.00")
        assert totals.taxable_amount == Decimal("10500.00")
        assert totals.cgst_amount == Decimal("930.00")
        assert totals.sgst_amount == Decimal("930.00")
        assert totals.total_gst_amount == Decimal("1860.00")
        assert totals.grand_total == Decimal("12360.00")

    def test_discount_split_is_reported(self):
        lines = [_computed("10000", 18, share="1000.00")]
        totals = calculate_invoice_totals(lines, Decimal("1000.00"), round_off_gst=True)
        assert totals.global_discount_amount == Decimal("1000.00")
        assert totals.line_discount_amount == Decimal("0.00")
        assert totals.discount_amount == Decimal("1000.00")
        assert totals.taxable_amount == Decimal("9000.00")
        assert totals.total_gst_amount == Decimal("1620.00")
        assert totals.grand_total == Decimal("10620.00")

    def test_grand_total_identity(self):
        lines = [_computed("9999.66", 18)]
        totals = calculate_invoice_totals(lines, Decimal("0.00"), round_off_gst=True)
        assert totals.grand_total == totals.taxable_amount + totals.total_gst_amount + totals.round_off_amount

    def test_no_lines(self):
        totals = calculate_invoice_totals([], Decimal("0.00"), round_off_gst=True)
        assert totals.subtotal == totals.taxable_amount == totals.grand_total == Decimal("0.00")


class TestWeightedAverageRate:

    def test_single_rate(self):
        assert calculate_weighted_average_rate([_computed("100", 18)]) == Decimal("18.00")

    def test_mixed_rates_within_bounds(self):
        rate = calculate_weighted_average_rate([_computed("1000", 18), _computed("3000", 12)])
        assert rate == Decimal("13.50")
        assert Decimal("12") <= rate <= Decimal("18")

    def test_interstate_uses_igst(self):
        assert calculate_weighted_average_rate([_computed("100", 28, interstate=True)]) == Decimal("28.00")

    def test_fractional_rate_stays_within_line_rates(self):
        req = InvoiceLineItemRequest(product_id=1, product_name="Item", quantity=Decimal("1"), unit_price=Decimal("1000"))
        line = calculate_line_item(
            req, rate=GSTRate.from_total(0, cess_rate=Decimal("0.125")), is_interstate=True,
        )
        assert line.effective_rate == Decimal("0.125")
        assert calculate_weighted_average_rate([line]) == Decimal("0.125")

    def test_zero_value_lines_do_not_widen_bounds(self):
        rate = calculate_weighted_average_rate([_computed("0", 28), _computed("100", 12)])
        assert rate == Decimal("12")

    def test_nothing_taxable(self):
        assert calculate_weighted_average_rate([]) == Decimal("0.00")
        assert calculate_weighted_average_rate([_computed("0", 18)]) == Decimal("0.00")


# ---------------------------------------------------------------------------
# Rounding policy
# ---------------------------------------------------------------------------

class TestRoundOff:

    def test_rounds_up_to_rupee(self):
        assert apply_round_off(Decimal("11799.60"), enabled=True) == (Decimal("11800.00"), Decimal("0.40"))

    def test_rounds_down_to_rupee(self):
        assert apply_round_off(Decimal("11800.49"), enabled=True) == (Decimal("11800.00"), Decimal("-0.49"))

    def test_half_rupee_rounds_up(self):
        assert apply_round_off(Decimal("100.50"), enabled=True) == (Decimal("101.00"), Decimal("0.50"))

    @pytest.mark.parametrize("total", ["11799.60", "0.01", "100.00"])
    def test_disabled(self, total):
        grand, round_off = apply_round_off(Decimal(total), enabled=False)
        assert grand == Decimal(total)
        assert round_off == Decimal("0.00")
