# gst_billing/domain/models/invoice.py
"""Invoice request and computed invoice models."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from gst_billing.domain.models.gst import (
    GSTConfiguration,
    GSTDisplayMode,
    GSTINValidationResult,
    GSTMode,
)

ZERO = Decimal("0.00")


class DiscountType(str, Enum):
    AMOUNT = "AMOUNT"
    PERCENT = "PERCENT"


class InvoiceType(str, Enum):
    SALE = "SALE"
    RETURN = "RETURN"
    CREDIT_NOTE = "CREDIT_NOTE"
    DEBIT_NOTE = "DEBIT_NOTE"
    PROFORMA = "PROFORMA"
    QUOTATION = "QUOTATION"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    UPI = "UPI"
    BANK_TRANSFER = "BANK_TRANSFER"
    CHEQUE = "CHEQUE"
    CREDIT = "CREDIT"
    OTHER = "OTHER"


class PaymentStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"
    PARTIALLY_PAID = "PARTIALLY_PAID"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class InvoiceLineItemRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int
    product_name: str
    product_description: str | None = None
    hsn_code: str | None = None
    unit_of_measure: str = "PCS"
    quantity: Decimal = Field(default=Decimal("1"), gt=0)
    unit_price: Decimal = Field(ge=0)
    discount_amount: Decimal = Field(default=ZERO, ge=0)
    discount_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)

    # Opaque to the engine, carried through to the computed line
    imei_serial: str | None = None
    batch_number: str | None = None
    warranty_period: str | None = None

    @property
    def has_conflicting_discounts(self) -> bool:
        return self.discount_percentage > 0 and self.discount_amount > 0


class InvoiceRequest(BaseModel):
    """Everything needed to build one invoice."""

    model_config = ConfigDict(frozen=True)

    transaction_id: int
    customer_id: int | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_gstin: str | None = None
    customer_address: str | None = None

    line_items: list[InvoiceLineItemRequest] = Field(default_factory=list)

    global_discount: Decimal = Field(default=ZERO, ge=0)
    global_discount_type: DiscountType = DiscountType.AMOUNT

    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.PAID
    amount_paid: Decimal = Field(default=ZERO, ge=0)

    invoice_date: datetime | None = None
    due_date: datetime | None = None
    invoice_type: InvoiceType = InvoiceType.SALE
    place_of_supply: str | None = None
    override_gst_mode: GSTMode | None = None

    terms_and_conditions: str | None = None
    notes: str | None = None
    created_by: str = "Admin"

    @property
    def global_discount_percentage(self) -> Decimal:
        if self.global_discount_type is DiscountType.PERCENT:
            return self.global_discount
        return Decimal("0")


# ---------------------------------------------------------------------------
# Computed invoice
# ---------------------------------------------------------------------------

class InvoiceLineItem(BaseModel):
    product_id: int
    product_name: str
    product_description: str | None = None
    hsn_code: str | None = None
    unit_of_measure: str = "PCS"

    quantity: Decimal
    unit_price: Decimal
    line_subtotal: Decimal
    discount_amount: Decimal = ZERO
    global_discount_share: Decimal = ZERO
    discount_percentage: Decimal = Decimal("0")
    taxable_amount: Decimal

    gst_rate_id: int | None = None
    cgst_rate: Decimal = Decimal("0")
    sgst_rate: Decimal = Decimal("0")
    igst_rate: Decimal = Decimal("0")
    cess_rate: Decimal = Decimal("0")
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    cess_amount: Decimal = ZERO
    total_gst_amount: Decimal = ZERO

    line_total: Decimal

    imei_serial: str | None = None
    batch_number: str | None = None
    warranty_period: str | None = None

    @property
    def combined_rate(self) -> Decimal:
        """CGST + SGST + IGST rate, excluding cess."""
        return self.cgst_rate + self.sgst_rate + self.igst_rate

    @property
    def effective_rate(self) -> Decimal:
        return max(self.cgst_rate + self.sgst_rate, self.igst_rate) + self.cess_rate


class Invoice(BaseModel):
    invoice_number: str
    transaction_id: int

    customer_id: int | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_gstin: str | None = None
    customer_address: str | None = None
    customer_state_code: str | None = None

    invoice_date: datetime
    due_date: datetime | None = None

    subtotal_amount: Decimal
    line_discount_amount: Decimal = ZERO
    global_discount_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    discount_percentage: Decimal = Decimal("0")
    taxable_amount: Decimal

    gst_config_id: int | None = None
    gst_mode: GSTMode
    is_interstate: bool = False
    shop_gstin: str | None = None
    shop_state_code: str | None = None

    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    cess_amount: Decimal = ZERO
    total_gst_amount: Decimal = ZERO
    gst_rate_applied: Decimal = Decimal("0")

    round_off_amount: Decimal = ZERO
    grand_total: Decimal
    amount_in_words: str | None = None

    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.PAID
    amount_paid: Decimal = ZERO
    amount_due: Decimal = ZERO

    show_gstin: bool = True
    show_gst_summary: bool = True
    include_gst_in_price: bool = False
    show_gst_to_customer: bool = False
    gst_display_mode: GSTDisplayMode = GSTDisplayMode.HIDDEN

    invoice_type: InvoiceType = InvoiceType.SALE
    place_of_supply: str | None = None
    terms_and_conditions: str | None = None
    notes: str | None = None

    created_at: datetime
    created_by: str = "Admin"


class GSTRateBreakdown(BaseModel):
    """Compliance bucket: one (rate, intra/inter, HSN) combination."""

    gst_rate: Decimal
    is_intrastate: bool
    hsn_code: str | None = None
    taxable_amount: Decimal
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    cess_amount: Decimal = ZERO
    total_gst_amount: Decimal


class GSTRateBreakdownItem(BaseModel):
    """Display bucket: every line sharing one combined rate."""

    gst_rate: Decimal
    taxable_amount: Decimal
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    cess_amount: Decimal = ZERO
    total_amount: Decimal
    hsn_codes: list[str] = Field(default_factory=list)


class HSNSummary(BaseModel):
    hsn_code: str
    description: str | None = None
    quantity: Decimal
    gst_rate: Decimal
    taxable_value: Decimal
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    cess_amount: Decimal = ZERO


class InvoiceGSTDetails(BaseModel):
    """Denormalised tax snapshot stored next to the invoice for returns filing."""

    transaction_id: int
    invoice_number: str
    gst_mode: GSTMode
    is_interstate: bool = False
    shop_gstin: str | None = None
    customer_gstin: str | None = None

    taxable_amount: Decimal
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    cess_amount: Decimal = ZERO
    total_gst_amount: Decimal
    round_off_amount: Decimal = ZERO

    gst_rate_breakdown: str = ""  # "rate:taxable:total_tax,..."
    hsn_summary: str = "[]"  # JSON list of HSNSummary
    created_at: datetime

    @property
    def effective_gst_rate(self) -> Decimal:
        if self.taxable_amount <= 0:
            return Decimal("0")
        return (self.total_gst_amount * 100 / self.taxable_amount).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )


class InvoiceGSTSummary(BaseModel):
    subtotal: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    igst_amount: Decimal
    cess_amount: Decimal
    total_gst_amount: Decimal
    round_off_amount: Decimal
    grand_total: Decimal
    is_interstate: bool
    gst_breakdown: list[GSTRateBreakdownItem] = Field(default_factory=list)


class InvoiceWithDetails(BaseModel):
    invoice: Invoice
    line_items: list[InvoiceLineItem]
    gst_configuration: GSTConfiguration
    gst_details: Optional[InvoiceGSTDetails] = None
    customer_gstin_validation: Optional[GSTINValidationResult] = None
    warnings: list[str] = Field(default_factory=list)
