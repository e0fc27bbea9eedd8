"""Startup configuration resolved from environment variables.

Values are read once by ``load_settings()`` through pydantic-settings;
the result is frozen and handed to the composition root.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field, ValidationError as SettingsValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from geocheckout.application.i18n import get_translation
from geocheckout.domain.exceptions import ConfigurationError
from geocheckout.domain.model.security import SecurityConfig

ENV_PREFIX = "CHECKOUT_"

SUPPORTED_CURRENCIES = (
    "USD", "EUR", "BRL", "JPY", "GBP", "CAD", "AUD", "CHF", "CNY", "INR",
    "KRW", "SGD", "HKD", "THB", "MYR", "IDR", "PHP", "VND", "TWD", "AED",
    "SAR", "ILS", "EGP", "ZAR", "NGN", "RUB", "TRY", "MXN", "ARS", "CLP",
)
SUPPORTED_LANGUAGES = (
    "pt", "en", "es", "fr", "de", "it", "ja", "zh", "ar", "ru",
    "hi", "ko", "th", "vi", "tr",
)


@dataclass(frozen=True)
class ProductConfig:
    name: str = "Premium Product"
    description: str = "Advanced digital solution for professionals"
    original_price: float = 297.00
    sale_price: float = 97.00
    currency: str = "USD"
    supported_currencies: tuple[str, ...] = SUPPORTED_CURRENCIES
    supported_languages: tuple[str, ...] = SUPPORTED_LANGUAGES


class Settings(BaseSettings):
    """Checkout settings; every field maps to a ``CHECKOUT_*`` variable."""

    api_url: str = Field(
        default="http://localhost:3001",
        description="Base URL of the order and notification endpoints",
    )
    publishable_key: str = Field(
        default="pk_test_placeholder",
        validation_alias="STRIPE_PUBLISHABLE_KEY",
        description="Stripe publishable key (pk_live_... or pk_test_...)",
    )
    base_currency: str = Field(default="USD", description="Currency prices are set in")
    geolocation_url: str = Field(default="https://ipapi.co/json/")
    exchange_rate_url: str = Field(
        default="https://api.exchangerate-api.com/v4/latest",
        description="Rates endpoint; the base currency is appended as a path segment",
    )
    http_timeout: float = Field(default=10.0, description="Seconds per outbound call")
    original_price: float = Field(default=297.00)
    sale_price: float = Field(default=97.00)

    security_anti_right_click: bool = Field(default=False)
    security_anti_copy: bool = Field(default=False)
    security_anti_devtools: bool = Field(default=False)
    security_anti_debug: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        case_sensitive=False,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @field_validator("api_url", "exchange_rate_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("base_currency")
    @classmethod
    def _currency_code(cls, v: str) -> str:
        code = v.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"expected a 3-letter currency code, got {v!r}")
        if code not in SUPPORTED_CURRENCIES:
            raise ValueError(f"{code} is not a supported currency")
        return code

    @field_validator("http_timeout", "original_price", "sale_price")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"must be positive, got {v}")
        return v

    @property
    def product(self) -> ProductConfig:
        return ProductConfig(
            original_price=self.original_price,
            sale_price=self.sale_price,
            currency=self.base_currency,
        )

    def security_for(self, language: str = "en") -> SecurityConfig:
        """Countermeasure flags with the alert text in *language*."""
        return SecurityConfig(
            anti_right_click=self.security_anti_right_click,
            anti_copy=self.security_anti_copy,
            anti_devtools=self.security_anti_devtools,
            anti_debug=self.security_anti_debug,
            alert_message=get_translation(language, "securityAlert"),
        )


def _variable_name(loc: tuple) -> str:
    name = str(loc[0]) if loc else "settings"
    if name in Settings.model_fields:
        return f"{ENV_PREFIX}{name}".upper()
    return name


def load_settings() -> Settings:
    try:
        return Settings()
    except SettingsValidationError as exc:
        problems = "; ".join(
            f"{_variable_name(error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc
