# gst_billing/domain/services/invoice_number.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from gst_billing.domain.models.invoice import InvoiceType

_PREFIXES: dict[InvoiceType, str] = {
    InvoiceType.SALE: "INV",
    InvoiceType.RETURN: "RTN",
    InvoiceType.CREDIT_NOTE: "CN",
    InvoiceType.DEBIT_NOTE: "DN",
    InvoiceType.PROFORMA: "PRO",
    InvoiceType.QUOTATION: "QUO",
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MODULUS = 1_000_000


def invoice_prefix(invoice_type: InvoiceType) -> str:
    return _PREFIXES[invoice_type]


def generate_invoice_number(invoice_type: InvoiceType, now: datetime) -> str:
    """
    ``<PREFIX><epoch millis mod 1e6, 6 digits>``, e.g. ``INV042137``.

    Two invoices of the same type built in the same millisecond (or exactly
    1000 seconds apart) get the same number; uniqueness is enforced where
    invoices are stored. Naive datetimes are taken as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    millis = (now - _EPOCH) // timedelta(milliseconds=1)
    return f"{invoice_prefix(invoice_type)}{millis % _MODULUS:06d}"
