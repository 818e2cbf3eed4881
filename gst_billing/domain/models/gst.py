# gst_billing/domain/models/gst.py
"""
GST configuration, rate and mode models.

GSTMode is a closed set of four modes. Everything a mode implies (whether tax
is charged, what the customer sees) lives in one policy table,
``MODE_POLICIES``, so callers never branch on the mode themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GSTDisplayMode(str, Enum):
    FULL_BREAKDOWN = "FULL_BREAKDOWN"  # CGST/SGST/IGST lines on the invoice
    TOTAL_GST_ONLY = "TOTAL_GST_ONLY"
    GSTIN_ONLY = "GSTIN_ONLY"
    HIDDEN = "HIDDEN"


class GSTMode(str, Enum):
    FULL_GST = "FULL_GST"
    PARTIAL_GST = "PARTIAL_GST"
    GST_REFERENCE = "GST_REFERENCE"
    NO_GST = "NO_GST"

    @property
    def policy(self) -> "ModePolicy":
        return MODE_POLICIES[self]

    @property
    def applies_tax(self) -> bool:
        return self.policy.applies_tax

    @property
    def show_to_customer(self) -> bool:
        return self.policy.show_to_customer

    @property
    def shows_gstin(self) -> bool:
        return self.policy.shows_gstin

    @property
    def display_mode(self) -> GSTDisplayMode:
        return self.policy.display_mode

    @property
    def display_name(self) -> str:
        return self.policy.display_name


@dataclass(frozen=True)
class ModePolicy:
    """Fixed behaviour attached to one GSTMode."""

    applies_tax: bool
    show_to_customer: bool
    shows_gstin: bool
    display_mode: GSTDisplayMode
    display_name: str
    description: str


MODE_POLICIES: dict[GSTMode, ModePolicy] = {
    GSTMode.FULL_GST: ModePolicy(
        applies_tax=True,
        show_to_customer=True,
        shows_gstin=True,
        display_mode=GSTDisplayMode.FULL_BREAKDOWN,
        display_name="Full GST Mode",
        description="Show complete GST breakdown with CGST, SGST, IGST on all invoices",
    ),
    GSTMode.PARTIAL_GST: ModePolicy(
        applies_tax=True,
        show_to_customer=False,
        shows_gstin=True,
        display_mode=GSTDisplayMode.HIDDEN,
        display_name="Partial GST (Hidden from Customer)",
        description="Apply GST internally but hide it from the customer copy",
    ),
    GSTMode.GST_REFERENCE: ModePolicy(
        applies_tax=False,
        show_to_customer=True,
        shows_gstin=True,
        display_mode=GSTDisplayMode.GSTIN_ONLY,
        display_name="GST Reference Only",
        description="No GST calculation, only show GSTIN as reference",
    ),
    GSTMode.NO_GST: ModePolicy(
        applies_tax=False,
        show_to_customer=False,
        shows_gstin=False,
        display_mode=GSTDisplayMode.HIDDEN,
        display_name="No GST",
        description="Completely remove GST from invoices",
    ),
}


@dataclass
class GSTINValidationResult:
    """Outcome of validating one GSTIN. Advisory: never raised."""

    is_valid: bool
    clean_gstin: str | None = None
    error_message: str | None = None
    state_code: str | None = None
    state_name: str | None = None
    pan_number: str | None = None
    entity_number: str | None = None

    @property
    def formatted_gstin(self) -> str | None:
        if not self.is_valid or not self.clean_gstin:
            return None
        g = self.clean_gstin
        return f"{g[:2]}-{g[2:7]}-{g[7:11]}-{g[11:]}"


class GSTRateCategory(str, Enum):
    EXEMPT = "EXEMPT"
    GST_5 = "GST_5"
    GST_12 = "GST_12"
    GST_18 = "GST_18"
    GST_28 = "GST_28"
    CUSTOM = "CUSTOM"


# Combined rate implied by each fixed category (CUSTOM falls back to 18%)
CATEGORY_RATES: dict[GSTRateCategory, Decimal] = {
    GSTRateCategory.EXEMPT: Decimal("0"),
    GSTRateCategory.GST_5: Decimal("5"),
    GSTRateCategory.GST_12: Decimal("12"),
    GSTRateCategory.GST_18: Decimal("18"),
    GSTRateCategory.GST_28: Decimal("28"),
    GSTRateCategory.CUSTOM: Decimal("18"),
}


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class GSTRate(BaseModel):
    """
    Applicable rate for a product / category.

    Component rates may be omitted; they are derived from ``gst_rate``
    (half each for CGST/SGST, the full rate for IGST). When only one of
    CGST/SGST is given the other takes the remainder. Components that do not
    add up to ``gst_rate`` are rejected.
    """

    model_config = ConfigDict(frozen=True)

    rate_id: int | None = None
    category: str = "Standard"
    hsn_code: str | None = None
    gst_rate: Decimal = Field(ge=0, le=100)
    cgst_rate: Decimal | None = Field(default=None, ge=0, le=100)
    sgst_rate: Decimal | None = Field(default=None, ge=0, le=100)
    igst_rate: Decimal | None = Field(default=None, ge=0, le=100)
    cess_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    description: str | None = None
    effective_from: datetime | None = None
    effective_to: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _fill_components(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("gst_rate") is None:
            return data
        data = dict(data)
        total = Decimal(str(data["gst_rate"]))
        cgst, sgst = data.get("cgst_rate"), data.get("sgst_rate")
        if cgst is None and sgst is None:
            data["cgst_rate"] = total / 2
            data["sgst_rate"] = total / 2
        elif sgst is None:
            data["sgst_rate"] = total - Decimal(str(cgst))
        elif cgst is None:
            data["cgst_rate"] = total - Decimal(str(sgst))
        if data.get("igst_rate") is None:
            data["igst_rate"] = total
        return data

    @model_validator(mode="after")
    def _check_components(self) -> "GSTRate":
        if self.cgst_rate + self.sgst_rate != self.gst_rate:
            raise ValueError(
                f"CGST {self.cgst_rate}% + SGST {self.sgst_rate}% does not match GST rate {self.gst_rate}%"
            )
        if self.igst_rate != self.gst_rate:
            raise ValueError(f"IGST {self.igst_rate}% does not match GST rate {self.gst_rate}%")
        return self

    @classmethod
    def from_total(
        cls,
        rate: Decimal | int | str,
        *,
        category: str = "Standard",
        hsn_code: str | None = None,
        cess_rate: Decimal | int | str = 0,
        description: str | None = None,
    ) -> "GSTRate":
        return cls(
            category=category,
            hsn_code=hsn_code,
            gst_rate=Decimal(str(rate)),
            cess_rate=Decimal(str(cess_rate)),
            description=description,
        )

    def is_effective(self, at: datetime) -> bool:
        """Both bounds are inclusive. Naive datetimes are taken as UTC."""
        at = _as_utc(at)
        if self.effective_from is not None and at < _as_utc(self.effective_from):
            return False
        if self.effective_to is not None and at > _as_utc(self.effective_to):
            return False
        return True


class GSTConfiguration(BaseModel):
    """Shop-level GST settings. One active configuration at a time."""

    model_config = ConfigDict(frozen=True)

    config_id: int | None = None

    shop_gstin: str | None = None
    shop_legal_name: str | None = None
    shop_trade_name: str | None = None
    shop_state_code: str | None = None
    shop_state_name: str | None = None

    default_gst_mode: GSTMode = GSTMode.NO_GST
    default_gst_rate: Decimal = Field(default=Decimal("18"), ge=0, le=100)
    default_gst_category: GSTRateCategory = GSTRateCategory.GST_18

    show_gstin_on_invoice: bool = True
    show_gst_summary: bool = True
    include_gst_in_price: bool = False
    round_off_gst: bool = True
    auto_detect_interstate: bool = True

    @property
    def is_gst_registered(self) -> bool:
        return bool(self.shop_gstin and self.shop_gstin.strip())

    @property
    def state_code_from_gstin(self) -> str | None:
        if not self.is_gst_registered:
            return None
        return self.shop_gstin.strip()[:2]
