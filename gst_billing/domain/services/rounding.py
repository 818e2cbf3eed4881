# gst_billing/domain/services/rounding.py

from __future__ import annotations

from decimal import Decimal

from gst_billing.domain.services.money import ZERO, round_money, round_rupee


def apply_round_off(total_before_rounding: Decimal, enabled: bool) -> tuple[Decimal, Decimal]:
    """
    Return ``(grand_total, round_off_amount)``.

    With rounding on, the total goes to the nearest rupee (half-up) and the
    signed difference is kept so that ``unrounded + round_off == grand_total``.
    """
    unrounded = round_money(total_before_rounding)
    if not enabled:
        return unrounded, ZERO
    rounded = round_rupee(unrounded)
    return rounded, rounded - unrounded
