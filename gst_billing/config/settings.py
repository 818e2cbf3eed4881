from decimal import Decimal

from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from the process + optionally from files
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="local", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="gst_billing", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))
    HOST: str = Field(default="0.0.0.0", validation_alias=AliasChoices("HOST", "host"))
    PORT: int = Field(default=8000, validation_alias=AliasChoices("PORT", "port"))

    # Shop GST configuration (one active configuration)
    GST_CONFIGURATION_ACTIVE: bool = Field(
        default=True,
        validation_alias=AliasChoices("GST_CONFIGURATION_ACTIVE", "gst_configuration_active"),
    )
    SHOP_GSTIN: str = Field(default="", validation_alias=AliasChoices("SHOP_GSTIN", "shop_gstin"))
    SHOP_LEGAL_NAME: str = Field(default="", validation_alias=AliasChoices("SHOP_LEGAL_NAME", "shop_legal_name"))
    SHOP_TRADE_NAME: str = Field(default="", validation_alias=AliasChoices("SHOP_TRADE_NAME", "shop_trade_name"))
    DEFAULT_GST_MODE: str = Field(default="NO_GST", validation_alias=AliasChoices("DEFAULT_GST_MODE", "default_gst_mode"))
    DEFAULT_GST_RATE: Decimal = Field(
        default=Decimal("18"),
        validation_alias=AliasChoices("DEFAULT_GST_RATE", "default_gst_rate"),
    )
    DEFAULT_GST_CATEGORY: str = Field(
        default="GST_18",
        validation_alias=AliasChoices("DEFAULT_GST_CATEGORY", "default_gst_category"),
    )
    ROUND_OFF_GST: bool = Field(default=True, validation_alias=AliasChoices("ROUND_OFF_GST", "round_off_gst"))
    SHOW_GSTIN_ON_INVOICE: bool = Field(
        default=True,
        validation_alias=AliasChoices("SHOW_GSTIN_ON_INVOICE", "show_gstin_on_invoice"),
    )
    SHOW_GST_SUMMARY: bool = Field(default=True, validation_alias=AliasChoices("SHOW_GST_SUMMARY", "show_gst_summary"))
    INCLUDE_GST_IN_PRICE: bool = Field(
        default=False,
        validation_alias=AliasChoices("INCLUDE_GST_IN_PRICE", "include_gst_in_price"),
    )
    AUTO_DETECT_INTERSTATE: bool = Field(
        default=True,
        validation_alias=AliasChoices("AUTO_DETECT_INTERSTATE", "auto_detect_interstate"),
    )
    STRICT_GSTIN_CHECKSUM: bool = Field(
        default=False,
        validation_alias=AliasChoices("STRICT_GSTIN_CHECKSUM", "strict_gstin_checksum"),
    )


settings = Settings()
