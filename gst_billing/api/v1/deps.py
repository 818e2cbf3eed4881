# gst_billing/api/v1/deps.py
"""
FastAPI dependencies for the v1 API layer.

``get_billing_service`` returns a process-wide ``BillingService`` wired to the
environment configuration and the static rate tables. Tests override it via
``app.dependency_overrides``.
"""

from __future__ import annotations

from gst_billing.config.settings import settings
from gst_billing.domain.services.billing_service import BillingService
from gst_billing.domain.services.collaborators import SettingsConfigurationProvider, StaticRateLookup

_service: BillingService | None = None


def get_billing_service() -> BillingService:
    global _service
    if _service is None:
        _service = BillingService(
            config_provider=SettingsConfigurationProvider(settings),
            rate_lookup=StaticRateLookup(),
            strict_gstin_checksum=settings.STRICT_GSTIN_CHECKSUM,
        )
    return _service
