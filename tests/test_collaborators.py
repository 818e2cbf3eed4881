"""Tests for settings-backed configuration and the static rate lookup."""

from decimal import Decimal

from gst_billing.config.settings import Settings
from gst_billing.domain.models.gst import GSTMode, GSTRate, GSTRateCategory
from gst_billing.domain.services.collaborators import SettingsConfigurationProvider, StaticRateLookup
from gst_billing.domain.services.tax_rate_defaults import default_category_rate, default_hsn_rates


def _settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


class TestSettingsConfigurationProvider:

    def test_builds_configuration(self, event_loop):
        s = _settings(
            SHOP_GSTIN=" 27aadcb2230m1zp ",
            SHOP_LEGAL_NAME="Bill Me Mobiles",
            DEFAULT_GST_MODE="full_gst",
            DEFAULT_GST_RATE="12",
            ROUND_OFF_GST=False,
        )
        config = event_loop.run_until_complete(SettingsConfigurationProvider(s).get_active_configuration())
        assert config.shop_gstin == "27AADCB2230M1ZP"
        assert config.shop_state_code == "27"
        assert config.shop_state_name == "Maharashtra"
        assert config.default_gst_mode is GSTMode.FULL_GST
        assert config.default_gst_rate == Decimal("12")
        assert config.round_off_gst is False
        assert config.is_gst_registered

    def test_unregistered_shop(self, event_loop):
        config = event_loop.run_until_complete(
            SettingsConfigurationProvider(_settings(SHOP_GSTIN="")).get_active_configuration()
        )
        assert config.shop_gstin is None
        assert not config.is_gst_registered
        assert config.state_code_from_gstin is None

    def test_inactive(self, event_loop):
        s = _settings(GST_CONFIGURATION_ACTIVE=False)
        assert event_loop.run_until_complete(SettingsConfigurationProvider(s).get_active_configuration()) is None


class TestStaticRateLookup:

    def test_hsn_defaults(self, event_loop):
        rate = event_loop.run_until_complete(StaticRateLookup().get_rate_for_product(1, "3926"))
        assert rate.gst_rate == Decimal("12")

    def test_product_rate_beats_hsn(self, event_loop):
        lookup = StaticRateLookup(product_rates={1: GSTRate.from_total(5)})
        rate = event_loop.run_until_complete(lookup.get_rate_for_product(1, "8517"))
        assert rate.gst_rate == Decimal("5")

    def test_unknown_product(self, event_loop):
        assert event_loop.run_until_complete(StaticRateLookup().get_rate_for_product(1, None)) is None
        assert event_loop.run_until_complete(StaticRateLookup().get_rate_for_product(1, "9999")) is None

    def test_category_default(self, event_loop):
        rate = event_loop.run_until_complete(StaticRateLookup().get_default_rate(GSTRateCategory.GST_28))
        assert rate.gst_rate == Decimal("28")
        assert rate.igst_rate == Decimal("28")


class TestDefaults:

    def test_category_rates(self):
        assert default_category_rate(GSTRateCategory.EXEMPT).gst_rate == 0
        assert default_category_rate("GST_5").cgst_rate == Decimal("2.5")
        assert default_category_rate("nonsense").gst_rate == Decimal("18")

    def test_hsn_table(self):
        table = default_hsn_rates()
        assert set(table) == {"8517", "8544", "3926"}
        assert table["8544"].description == "Mobile Accessories"
