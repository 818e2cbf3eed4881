# gst_billing/domain/services/amount_in_words.py
"""
Rupee amounts in words, Indian numbering (Thousand, Lakh, Crore).

    >>> convert_amount_to_words(Decimal("11800.50"))
    'Eleven Thousand Eight Hundred Rupees and Fifty Paise Only'
"""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

from gst_billing.domain.services.money import round_money

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

_CRORE = 10_000_000
_LAKH = 100_000
_THOUSAND = 1_000


def _below_thousand(n: int) -> str:
    words: list[str] = []
    if n >= 100:
        words += [_ONES[n // 100], "Hundred"]
        n %= 100
    if n >= 20:
        words.append(_TENS[n // 10])
        if n % 10:
            words.append(_ONES[n % 10])
    elif n:
        words.append(_ONES[n])
    return " ".join(words)


def number_to_words(n: int) -> str:
    """Non-negative integer in Indian words; ``""`` for 0."""
    if n == 0:
        return ""

    words: list[str] = []
    if n >= _CRORE:
        crores = n // _CRORE
        # Beyond 999 crore the crore count is itself spelled out in lakhs/thousands
        words.append(number_to_words(crores))
        words.append("Crores" if crores > 1 else "Crore")
        n %= _CRORE
    if n >= _LAKH:
        lakhs = n // _LAKH
        words += [_below_thousand(lakhs), "Lakhs" if lakhs > 1 else "Lakh"]
        n %= _LAKH
    if n >= _THOUSAND:
        words += [_below_thousand(n // _THOUSAND), "Thousand"]
        n %= _THOUSAND
    if n:
        words.append(_below_thousand(n))
    return " ".join(words)


def convert_amount_to_words(amount: Decimal) -> str:
    amount = round_money(Decimal(amount))
    if amount == 0:
        return "Zero Rupees Only"
    if amount < 0:
        return "Minus " + convert_amount_to_words(-amount)

    rupees = int(amount.quantize(Decimal("1"), rounding=ROUND_DOWN))
    paise = int(((amount - rupees) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    parts: list[str] = []
    if rupees:
        parts.append(f"{number_to_words(rupees)} {'Rupee' if rupees == 1 else 'Rupees'}")
    if paise:
        if rupees:
            parts.append("and")
        parts.append(f"{number_to_words(paise)} Paise")
    parts.append("Only")
    return " ".join(parts)


def convert_with_symbol(amount: Decimal, currency_symbol: str = "₹") -> str:
    """``₹ 11800.00 (Eleven Thousand Eight Hundred Rupees Only)``"""
    return f"{currency_symbol} {round_money(Decimal(amount))} ({convert_amount_to_words(amount)})"


class IndianAmountToWords:
    """Default ``AmountToWords`` collaborator for the billing service."""

    def convert(self, amount: Decimal) -> str:
        return convert_amount_to_words(amount)
