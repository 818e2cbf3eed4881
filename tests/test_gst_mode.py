"""Tests for GST mode policy and interstate detection."""

import pytest

from gst_billing.domain.models.gst import GSTConfiguration, GSTDisplayMode, GSTMode
from gst_billing.domain.services.gst_mode import (
    determine_display_mode,
    mode_policy,
    resolve_gst_mode,
    show_gst_summary,
)
from gst_billing.domain.services.interstate import determine_interstate

MH_GSTIN = "27AADCB2230M1ZP"
MH_GSTIN_2 = "27AAAAA0000A1Z5"
TG_GSTIN = "36AABCU9603R1ZM"


class TestModePolicy:

    @pytest.mark.parametrize(
        "mode, applies_tax, shown, display",
        [
            (GSTMode.FULL_GST, True, True, GSTDisplayMode.FULL_BREAKDOWN),
            (GSTMode.PARTIAL_GST, True, False, GSTDisplayMode.HIDDEN),
            (GSTMode.GST_REFERENCE, False, True, GSTDisplayMode.GSTIN_ONLY),
            (GSTMode.NO_GST, False, False, GSTDisplayMode.HIDDEN),
        ],
    )
    def test_policy_table(self, mode, applies_tax, shown, display):
        assert mode.applies_tax is applies_tax
        assert determine_display_mode(mode) == (shown, display)
        assert mode_policy(mode) is mode.policy

    def test_only_no_gst_hides_gstin(self):
        assert [m for m in GSTMode if not m.shows_gstin] == [GSTMode.NO_GST]

    def test_override_wins(self):
        config = GSTConfiguration(default_gst_mode=GSTMode.FULL_GST)
        assert resolve_gst_mode(config) is GSTMode.FULL_GST
        assert resolve_gst_mode(config, GSTMode.NO_GST) is GSTMode.NO_GST

    def test_summary_only_for_full_gst(self):
        config = GSTConfiguration(show_gst_summary=True)
        assert show_gst_summary(GSTMode.FULL_GST, config)
        assert not show_gst_summary(GSTMode.PARTIAL_GST, config)
        assert not show_gst_summary(GSTMode.FULL_GST, GSTConfiguration(show_gst_summary=False))


class TestInterstate:

    def test_different_states(self):
        assert determine_interstate(MH_GSTIN, TG_GSTIN) is True

    def test_same_state(self):
        assert determine_interstate(MH_GSTIN, MH_GSTIN_2) is False

    def test_no_customer_gstin(self):
        assert determine_interstate(MH_GSTIN, None) is False

    def test_invalid_customer_gstin_treated_as_absent(self):
        assert determine_interstate(MH_GSTIN, "ABC123") is False

    def test_unregistered_shop(self):
        assert determine_interstate(None, TG_GSTIN) is False

    def test_auto_detect_off(self):
        assert determine_interstate(MH_GSTIN, TG_GSTIN, auto_detect=False) is False
