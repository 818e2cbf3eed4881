# gst_billing/domain/services/gst_mode.py

from __future__ import annotations

from gst_billing.domain.models.gst import (
    MODE_POLICIES,
    GSTConfiguration,
    GSTDisplayMode,
    GSTMode,
    ModePolicy,
)


def resolve_gst_mode(config: GSTConfiguration, override: GSTMode | None = None) -> GSTMode:
    """A per-invoice override always beats the shop default."""
    if override is not None:
        return override
    return config.default_gst_mode


def mode_policy(mode: GSTMode) -> ModePolicy:
    return MODE_POLICIES[mode]


def determine_display_mode(mode: GSTMode) -> tuple[bool, GSTDisplayMode]:
    """Return ``(show_gst_to_customer, display_mode)`` for an invoice in ``mode``."""
    policy = MODE_POLICIES[mode]
    return policy.show_to_customer, policy.display_mode


def show_gst_summary(mode: GSTMode, config: GSTConfiguration) -> bool:
    """The summary block is only printed on full-GST invoices, and only if the shop wants it."""
    return mode is GSTMode.FULL_GST and config.show_gst_summary
