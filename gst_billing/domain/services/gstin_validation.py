# gst_billing/domain/services/gstin_validation.py
"""
GSTIN / PAN / HSN validation helpers.

GSTIN layout (15 chars):
    22      state code
    AAAAA   PAN letters
    0000    PAN digits
    A       PAN check letter
    1       entity code
    Z       fixed
    5       check character

Nothing here raises on bad input; callers get a result object or ``False``.
"""

from __future__ import annotations

import re
from decimal import Decimal

from gst_billing.domain.models.gst import GSTINValidationResult

PAN_REGEX = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
GSTIN_REGEX = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
HSN_REGEX = re.compile(r"^[0-9]+$")

_CHECKSUM_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

STATE_CODES: dict[str, str] = {
    "01": "Jammu and Kashmir", "02": "Himachal Pradesh", "03": "Punjab",
    "04": "Chandigarh", "05": "Uttarakhand", "06": "Haryana",
    "07": "Delhi", "08": "Rajasthan", "09": "Uttar Pradesh",
    "10": "Bihar", "11": "Sikkim", "12": "Arunachal Pradesh",
    "13": "Nagaland", "14": "Manipur", "15": "Mizoram",
    "16": "Tripura", "17": "Meghalaya", "18": "Assam",
    "19": "West Bengal", "20": "Jharkhand", "21": "Odisha",
    "22": "Chhattisgarh", "23": "Madhya Pradesh", "24": "Gujarat",
    "25": "Daman and Diu", "26": "Dadra and Nagar Haveli", "27": "Maharashtra",
    "28": "Andhra Pradesh", "29": "Karnataka", "30": "Goa",
    "31": "Lakshadweep", "32": "Kerala", "33": "Tamil Nadu",
    "34": "Puducherry", "35": "Andaman and Nicobar Islands", "36": "Telangana",
    "37": "Andhra Pradesh", "38": "Ladakh", "96": "Other Territory",
    "97": "Other Territory", "99": "Centre Jurisdiction",
}

STANDARD_GST_RATES: tuple[Decimal, ...] = tuple(
    Decimal(r) for r in ("0", "0.25", "3", "5", "12", "18", "28")
)

_RATE_LABELS: dict[Decimal, str] = {
    Decimal("0"): "Exempt",
    Decimal("0.25"): "Jewellery (0.25%)",
    Decimal("3"): "Gold/Silver (3%)",
    Decimal("5"): "Essential Items (5%)",
    Decimal("12"): "Standard Items (12%)",
    Decimal("18"): "Most Goods (18%)",
    Decimal("28"): "Luxury Items (28%)",
}


def clean_gstin(gstin: str | None) -> str | None:
    """Strip separators/whitespace and upper-case. ``None`` for blank input."""
    if not gstin or not gstin.strip():
        return None
    return re.sub(r"[^A-Z0-9]", "", gstin.strip().upper())


def is_valid_pan(pan: str | None) -> bool:
    if not pan:
        return False
    pan = pan.strip().upper()
    return bool(PAN_REGEX.match(pan))


def compute_gstin_checksum(first_14: str) -> str:
    """Mod-36 check character for the first 14 characters of a GSTIN."""
    total = 0
    for i, ch in enumerate(first_14.upper()):
        factor = 2 if i % 2 else 1
        product = _CHECKSUM_CHARS.index(ch) * factor
        total += product // 36 + product % 36
    return _CHECKSUM_CHARS[(36 - total % 36) % 36]


def validate_gstin_with_details(gstin: str | None, strict: bool = False) -> GSTINValidationResult:
    """
    Validate a GSTIN and pull out its parts.

    The 15th character is treated as a placeholder unless ``strict`` is set, so
    sample and test GSTINs pass format validation.
    """
    if not gstin or not gstin.strip():
        return GSTINValidationResult(is_valid=False, error_message="GSTIN cannot be empty")

    clean = gstin.strip().upper()

    if len(clean) != 15:
        return GSTINValidationResult(
            is_valid=False,
            clean_gstin=clean,
            error_message="GSTIN must be exactly 15 characters",
        )

    state_code = clean[:2]

    if not GSTIN_REGEX.match(clean):
        return GSTINValidationResult(
            is_valid=False,
            clean_gstin=clean,
            error_message="Invalid GSTIN format",
            state_code=state_code,
            state_name=STATE_CODES.get(state_code),
        )

    if state_code not in STATE_CODES:
        return GSTINValidationResult(
            is_valid=False,
            clean_gstin=clean,
            error_message="Invalid state code in GSTIN",
            state_code=state_code,
        )

    if strict and compute_gstin_checksum(clean[:14]) != clean[14]:
        return GSTINValidationResult(
            is_valid=False,
            clean_gstin=clean,
            error_message="Invalid GSTIN checksum",
            state_code=state_code,
            state_name=STATE_CODES[state_code],
            pan_number=clean[2:12],
            entity_number=clean[12:14],
        )

    return GSTINValidationResult(
        is_valid=True,
        clean_gstin=clean,
        state_code=state_code,
        state_name=STATE_CODES[state_code],
        pan_number=clean[2:12],
        entity_number=clean[12:14],
    )


def is_valid_gstin(gstin: str | None) -> bool:
    return validate_gstin_with_details(gstin).is_valid


def get_state_code(gstin: str | None) -> str | None:
    if not gstin or len(gstin.strip()) < 2:
        return None
    return gstin.strip().upper()[:2]


def get_state_name(gstin: str | None) -> str | None:
    return STATE_CODES.get(get_state_code(gstin) or "")


def is_same_state(gstin1: str | None, gstin2: str | None) -> bool:
    code1, code2 = get_state_code(gstin1), get_state_code(gstin2)
    if code1 is None or code2 is None:
        return False
    return code1 == code2


def extract_pan(gstin: str | None) -> str | None:
    if not gstin or len(gstin.strip()) < 12:
        return None
    return gstin.strip().upper()[2:12]


def format_gstin(gstin: str | None) -> str | None:
    """``27AADCB2230M1ZP`` -> ``27-AADCB-2230-M1ZP``; other lengths unchanged."""
    if not gstin or not gstin.strip():
        return None
    clean = gstin.strip().upper()
    if len(clean) != 15:
        return clean
    return f"{clean[:2]}-{clean[2:7]}-{clean[7:11]}-{clean[11:]}"


def mask_gstin(gstin: str | None) -> str:
    """Show only the state code and last 3 characters, for logs."""
    if not gstin or len(gstin) != 15:
        return gstin or ""
    return gstin[:2] + "•" * 10 + gstin[12:]


# ---------------------------------------------------------------------------
# HSN / rate helpers
# ---------------------------------------------------------------------------

def is_valid_hsn_code(hsn: str | None) -> bool:
    """HSN/SAC codes are 4, 6 or 8 digits."""
    if not hsn:
        return False
    clean = hsn.strip()
    return len(clean) in (4, 6, 8) and bool(HSN_REGEX.match(clean))


def format_hsn_code(hsn: str | None) -> str | None:
    if not hsn or not hsn.strip():
        return None
    clean = hsn.strip()
    if len(clean) == 6:
        return f"{clean[:4]}.{clean[4:]}"
    if len(clean) == 8:
        return f"{clean[:4]}.{clean[4:6]}.{clean[6:]}"
    return clean


def is_valid_gst_rate(rate: Decimal) -> bool:
    return Decimal("0") <= rate <= Decimal("100")


def is_standard_gst_rate(rate: Decimal) -> bool:
    return rate in STANDARD_GST_RATES


def gst_rate_label(rate: Decimal) -> str:
    return _RATE_LABELS.get(rate, f"Custom Rate ({rate.normalize()}%)")
