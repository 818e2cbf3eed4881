"""Tests for compliance / display breakdowns and the HSN summary."""

import json
from decimal import Decimal

from gst_billing.domain.models.gst import GSTRate
from gst_billing.domain.models.invoice import InvoiceLineItemRequest
from gst_billing.domain.services.gst_breakdown import (
    build_compliance_breakdown,
    build_display_breakdown,
    build_hsn_summary,
    parse_rate_breakdown,
    serialize_rate_breakdown,
)
from gst_billing.domain.services.line_item_calculator import calculate_line_item


def _line(price, rate, hsn=None, qty="1", cess=0, interstate=False, product_id=1):
    req = InvoiceLineItemRequest(
        product_id=product_id,
        product_name=f"Product {product_id}",
        hsn_code=hsn,
        quantity=Decimal(qty),
        unit_price=Decimal(price),
    )
    return calculate_line_item(req, rate=GSTRate.from_total(rate, cess_rate=cess), is_interstate=interstate)


class TestComplianceBreakdown:

    def test_groups_by_rate_and_hsn(self):
        lines = [
            _line("1000", 18, hsn="8517"),
            _line("500", 18, hsn="8517", product_id=2),
            _line("200", 18, hsn="8544", product_id=3),
            _line("300", 12, hsn="3926", product_id=4),
        ]
        buckets = build_compliance_breakdown(lines, is_interstate=False)
        assert [(b.gst_rate, b.hsn_code) for b in buckets] == [
            (Decimal("18"), "8517"),
            (Decimal("18"), "8544"),
            (Decimal("12"), "3926"),
        ]
        first = buckets[0]
        assert first.is_intrastate
        assert first.taxable_amount == Decimal("1500.00")
        assert first.total_gst_amount == Decimal("270.00")

    def test_combined_rate_excludes_unapplied_components(self):
        inter = build_compliance_breakdown([_line("1000", 18, interstate=True)], is_interstate=True)
        intra = build_compliance_breakdown([_line("1000", 18)], is_interstate=False)
        assert inter[0].gst_rate == intra[0].gst_rate == Decimal("18")
        assert not inter[0].is_intrastate

    def test_serialize_and_parse(self):
        buckets = build_compliance_breakdown([_line("10000", 18), _line("500", 12, product_id=2)], False)
        raw = serialize_rate_breakdown(buckets)
        assert raw == "18.00:10000.00:1800.00,12.00:500.00:60.00"
        assert parse_rate_breakdown(raw) == [
            (Decimal("18.00"), Decimal("10000.00"), Decimal("1800.00")),
            (Decimal("12.00"), Decimal("500.00"), Decimal("60.00")),
        ]

    def test_parse_skips_garbage(self):
        assert parse_rate_breakdown("18.00:100.00:18.00,bad,5:x:1") == [
            (Decimal("18.00"), Decimal("100.00"), Decimal("18.00")),
        ]
        assert parse_rate_breakdown("") == []
        assert parse_rate_breakdown(None) == []


class TestDisplayBreakdown:

    def test_sorted_by_rate_with_distinct_hsn(self):
        lines = [
            _line("1000", 18, hsn="8517"),
            _line("300", 12, hsn="3926", product_id=2),
            _line("200", 18, hsn="8544", product_id=3),
            _line("100", 18, hsn="8517", product_id=4),
        ]
        items = build_display_breakdown(lines)
        assert [i.gst_rate for i in items] == [Decimal("12"), Decimal("18")]
        eighteen = items[1]
        assert eighteen.hsn_codes == ["8517", "8544"]
        assert eighteen.taxable_amount == Decimal("1300.00")
        assert eighteen.total_amount == Decimal("1534.00")

    def test_cess_is_part_of_display_key(self):
        items = build_display_breakdown([_line("1000", 28), _line("1000", 28, cess=12, product_id=2)])
        assert [i.gst_rate for i in items] == [Decimal("28"), Decimal("40")]

    def test_groupings_stay_distinct(self):
        lines = [_line("1000", 28, hsn="8517"), _line("1000", 28, hsn="8517", cess=12, product_id=2)]
        assert len(build_compliance_breakdown(lines, False)) == 1
        assert len(build_display_breakdown(lines)) == 2


class TestHSNSummary:

    def test_summary_rows(self):
        lines = [
            _line("5000", 18, hsn="8517", qty="2"),
            _line("1000", 18, hsn="8517", product_id=2),
            _line("50", 18, product_id=3),
        ]
        rows = build_hsn_summary(lines)
        assert len(rows) == 1
        row = rows[0]
        assert row.hsn_code == "8517"
        assert row.description == "Mobile Phones"
        assert row.quantity == Decimal("3")
        assert row.taxable_value == Decimal("11000.00")
        assert row.cgst_amount == Decimal("990.00")

    def test_json_encodable(self):
        rows = build_hsn_summary([_line("100", 12, hsn="3926")])
        payload = json.loads(json.dumps([r.model_dump(mode="json") for r in rows]))
        assert payload[0]["hsn_code"] == "3926"
        assert payload[0]["description"] == "Mobile Cases & Covers"
