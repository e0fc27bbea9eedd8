"""Tests for environment-backed settings."""

import pytest

from geocheckout.domain.exceptions import ConfigurationError
from geocheckout.infrastructure.config import load_settings

_VARS = (
    "CHECKOUT_API_URL", "STRIPE_PUBLISHABLE_KEY", "CHECKOUT_BASE_CURRENCY",
    "CHECKOUT_HTTP_TIMEOUT", "CHECKOUT_SALE_PRICE", "CHECKOUT_ORIGINAL_PRICE",
    "CHECKOUT_EXCHANGE_RATE_URL", "CHECKOUT_GEOLOCATION_URL",
    "CHECKOUT_SECURITY_ANTI_RIGHT_CLICK", "CHECKOUT_SECURITY_ANTI_COPY",
    "CHECKOUT_SECURITY_ANTI_DEVTOOLS", "CHECKOUT_SECURITY_ANTI_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings()

        assert settings.api_url == "http://localhost:3001"
        assert settings.publishable_key == "pk_test_placeholder"
        assert settings.product.original_price == 297.00
        assert settings.product.sale_price == 97.00
        assert settings.product.currency == "USD"
        assert not settings.security_for().any_enabled

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("CHECKOUT_API_URL", "https://shop.example.com/")
        monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", "pk_live_123")
        monkeypatch.setenv("CHECKOUT_SECURITY_ANTI_DEVTOOLS", "true")
        monkeypatch.setenv("CHECKOUT_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("CHECKOUT_BASE_CURRENCY", " eur ")

        settings = load_settings()

        assert settings.api_url == "https://shop.example.com"
        assert settings.publishable_key == "pk_live_123"
        assert settings.security_for().anti_devtools
        assert not settings.security_for().anti_debug
        assert settings.http_timeout == 2.5
        assert settings.product.currency == "EUR"

    def test_empty_value_keeps_default(self, monkeypatch):
        monkeypatch.setenv("CHECKOUT_SALE_PRICE", "")
        assert load_settings().product.sale_price == 97.00

    def test_settings_are_frozen(self):
        settings = load_settings()
        with pytest.raises(Exception):
            settings.api_url = "http://elsewhere"


class TestInvalidSettings:

    def test_bad_number_rejected(self, monkeypatch):
        monkeypatch.setenv("CHECKOUT_HTTP_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError, match="CHECKOUT_HTTP_TIMEOUT"):
            load_settings()

    def test_non_positive_price_rejected(self, monkeypatch):
        monkeypatch.setenv("CHECKOUT_SALE_PRICE", "0")
        with pytest.raises(ConfigurationError, match="CHECKOUT_SALE_PRICE.*must be positive"):
            load_settings()

    def test_bad_currency_rejected(self, monkeypatch):
        monkeypatch.setenv("CHECKOUT_BASE_CURRENCY", "dollars")
        with pytest.raises(ConfigurationError, match="CHECKOUT_BASE_CURRENCY"):
            load_settings()

    def test_unsupported_currency_rejected(self, monkeypatch):
        monkeypatch.setenv("CHECKOUT_BASE_CURRENCY", "XYZ")
        with pytest.raises(ConfigurationError, match="not a supported currency"):
            load_settings()


class TestSecurityDefaults:

    def test_alert_message_follows_language(self):
        settings = load_settings()

        assert settings.security_for("pt").alert_message.startswith("Alerta de segurança")
        assert settings.security_for("es").alert_message.startswith("Alerta de seguridad")
        assert settings.security_for().alert_message.startswith("Security alert")

    def test_unknown_language_falls_back_to_english(self):
        message = load_settings().security_for("ja").alert_message
        assert message == load_settings().security_for("en").alert_message
