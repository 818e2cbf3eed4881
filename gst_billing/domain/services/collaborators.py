# gst_billing/domain/services/collaborators.py
"""
Interfaces the billing service depends on, plus in-memory implementations.

Storage of configurations and rate tables lives outside this package; anything
that satisfies these protocols can be passed to ``BillingService``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Protocol

from gst_billing.domain.models.gst import GSTConfiguration, GSTMode, GSTRate, GSTRateCategory
from gst_billing.domain.services.gstin_validation import get_state_code, get_state_name
from gst_billing.domain.services.tax_rate_defaults import default_category_rate, default_hsn_rates

logger = logging.getLogger("collaborators")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ConfigurationProvider(Protocol):
    async def get_active_configuration(self) -> GSTConfiguration | None: ...


class RateLookup(Protocol):
    async def get_rate_for_product(self, product_id: int, hsn_code: str | None) -> GSTRate | None: ...

    async def get_default_rate(self, category: GSTRateCategory) -> GSTRate | None: ...


class AmountToWords(Protocol):
    def convert(self, amount: Decimal) -> str: ...


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------

class StaticConfigurationProvider:
    """Always returns the configuration it was built with (``None`` = not set up)."""

    def __init__(self, config: GSTConfiguration | None) -> None:
        self._config = config

    async def get_active_configuration(self) -> GSTConfiguration | None:
        return self._config


class SettingsConfigurationProvider:
    """Builds the shop configuration from environment settings."""

    def __init__(self, settings=None) -> None:
        if settings is None:
            from gst_billing.config.settings import settings as app_settings
            settings = app_settings
        self._settings = settings

    async def get_active_configuration(self) -> GSTConfiguration | None:
        s = self._settings
        if not s.GST_CONFIGURATION_ACTIVE:
            return None

        gstin = s.SHOP_GSTIN.strip().upper() or None
        state_code = get_state_code(gstin) if gstin else None
        return GSTConfiguration(
            config_id=1,
            shop_gstin=gstin,
            shop_legal_name=s.SHOP_LEGAL_NAME or None,
            shop_trade_name=s.SHOP_TRADE_NAME or None,
            shop_state_code=state_code,
            shop_state_name=get_state_name(gstin),
            default_gst_mode=GSTMode(s.DEFAULT_GST_MODE.upper()),
            default_gst_rate=s.DEFAULT_GST_RATE,
            default_gst_category=GSTRateCategory(s.DEFAULT_GST_CATEGORY.upper()),
            show_gstin_on_invoice=s.SHOW_GSTIN_ON_INVOICE,
            show_gst_summary=s.SHOW_GST_SUMMARY,
            include_gst_in_price=s.INCLUDE_GST_IN_PRICE,
            round_off_gst=s.ROUND_OFF_GST,
            auto_detect_interstate=s.AUTO_DETECT_INTERSTATE,
        )


class StaticRateLookup:
    """
    Rates from fixed tables.

    Product-specific rates win over HSN rates; category defaults come from
    ``tax_rate_defaults`` unless overridden.
    """

    def __init__(
        self,
        product_rates: dict[int, GSTRate] | None = None,
        hsn_rates: dict[str, GSTRate] | None = None,
        category_rates: dict[GSTRateCategory, GSTRate] | None = None,
    ) -> None:
        self._product_rates = dict(product_rates or {})
        self._hsn_rates = default_hsn_rates() if hsn_rates is None else dict(hsn_rates)
        self._category_rates = dict(category_rates or {})

    async def get_rate_for_product(self, product_id: int, hsn_code: str | None) -> GSTRate | None:
        rate = self._product_rates.get(product_id)
        if rate is not None:
            return rate
        if hsn_code:
            return self._hsn_rates.get(hsn_code)
        return None

    async def get_default_rate(self, category: GSTRateCategory) -> GSTRate | None:
        rate = self._category_rates.get(category)
        if rate is not None:
            return rate
        logger.debug("No configured rate for category %s, using hardcoded default", category.value)
        return default_category_rate(category)
