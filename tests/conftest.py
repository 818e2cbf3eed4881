"""Shared test fixtures for the GST billing test suite."""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from gst_billing.domain.models.gst import GSTConfiguration, GSTMode
from gst_billing.domain.models.invoice import InvoiceLineItemRequest, InvoiceRequest
from gst_billing.domain.services.billing_service import BillingService
from gst_billing.domain.services.collaborators import StaticConfigurationProvider, StaticRateLookup

MH_GSTIN = "27AADCB2230M1ZP"  # Maharashtra

FIXED_NOW = datetime(2025, 1, 15, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def full_gst_config() -> GSTConfiguration:
    """Maharashtra shop charging and showing full GST."""
    return GSTConfiguration(
        config_id=1,
        shop_gstin=MH_GSTIN,
        shop_legal_name="Bill Me Mobiles Pvt Ltd",
        shop_state_code="27",
        shop_state_name="Maharashtra",
        default_gst_mode=GSTMode.FULL_GST,
    )


@pytest.fixture
def make_service(fixed_clock):
    """Factory: ``make_service(config, rate_lookup=None)`` -> BillingService with a fixed clock."""

    def _make(config, rate_lookup=None, **kwargs):
        return BillingService(
            config_provider=StaticConfigurationProvider(config),
            rate_lookup=rate_lookup or StaticRateLookup(),
            clock=fixed_clock,
            **kwargs,
        )

    return _make


@pytest.fixture
def phone_line() -> InvoiceLineItemRequest:
    """Two phones at 5000 each, HSN 8517 (18%)."""
    return InvoiceLineItemRequest(
        product_id=101,
        product_name="Redmi Note 13",
        hsn_code="8517",
        quantity=Decimal("2"),
        unit_price=Decimal("5000"),
    )


@pytest.fixture
def sale_request(phone_line) -> InvoiceRequest:
    return InvoiceRequest(transaction_id=5001, customer_name="Walk-in", line_items=[phone_line])
