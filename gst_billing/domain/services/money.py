# gst_billing/domain/services/money.py
"""Fixed-point money helpers. Every amount is a Decimal at scale 2, half-up."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

PAISE = Decimal("0.01")
RUPEE = Decimal("1")
HUNDRED = Decimal("100")
ZERO = Decimal("0.00")


def to_decimal(value, default: str | None = None) -> Decimal:
    """
    Convert int / str / float / Decimal to Decimal via ``str`` (no binary float noise).

    Raises ``InvalidOperation`` on garbage unless ``default`` is given, in which
    case the default is returned instead.
    """
    if isinstance(value, Decimal):
        return value
    if value is None:
        if default is None:
            raise InvalidOperation("cannot convert None to Decimal")
        return Decimal(default)
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        if default is None:
            raise
        return Decimal(default)


def round_money(value: Decimal) -> Decimal:
    return value.quantize(PAISE, rounding=ROUND_HALF_UP)


def round_rupee(value: Decimal) -> Decimal:
    """Round to a whole rupee, returned at scale 2 (``11799.60`` -> ``11800.00``)."""
    return value.quantize(RUPEE, rounding=ROUND_HALF_UP).quantize(PAISE)


def percent_of(amount: Decimal, rate: Decimal) -> Decimal:
    """``amount * rate / 100`` rounded to paise."""
    return round_money(amount * rate / HUNDRED)


def money_sum(values) -> Decimal:
    return round_money(sum(values, ZERO))
