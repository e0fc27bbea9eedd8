"""Localization context and the static lookup tables behind it.

The tables are the fallback tier of every lookup: they are consulted
when a live service is unavailable, and they alone decide currency and
display language for a resolved country.
"""

from __future__ import annotations

from dataclasses import dataclass

from geocheckout.domain.exceptions import ValidationError

DEFAULT_COUNTRY = "US"
DEFAULT_LANGUAGE = "en"
DEFAULT_BASE_CURRENCY = "USD"

# Primary language subtag -> country, used when IP lookup fails.
LANGUAGE_TO_COUNTRY: dict[str, str] = {
    "pt": "BR", "es": "ES", "fr": "FR", "de": "DE", "it": "IT",
    "ja": "JP", "zh": "CN", "ar": "SA", "ru": "RU", "hi": "IN",
    "ko": "KR", "th": "TH", "vi": "VN", "tr": "TR",
}

COUNTRY_TO_CURRENCY: dict[str, str] = {
    "US": "USD", "BR": "BRL", "JP": "JPY", "DE": "EUR", "GB": "GBP", "CA": "CAD",
    "AU": "AUD", "CH": "CHF", "CN": "CNY", "IN": "INR", "KR": "KRW", "SG": "SGD",
    "HK": "HKD", "TH": "THB", "MY": "MYR", "ID": "IDR", "PH": "PHP", "VN": "VND",
    "TW": "TWD", "AE": "AED", "SA": "SAR", "IL": "ILS", "EG": "EGP", "ZA": "ZAR",
    "NG": "NGN", "RU": "RUB", "TR": "TRY", "MX": "MXN", "AR": "ARS", "CL": "CLP",
}

COUNTRY_TO_LANGUAGE: dict[str, str] = {
    "BR": "pt", "US": "en", "GB": "en", "ES": "es", "MX": "es", "AR": "es",
    "FR": "fr", "CA": "fr", "DE": "de", "AT": "de", "IT": "it", "JP": "ja",
    "CN": "zh", "TW": "zh", "SA": "ar", "AE": "ar", "RU": "ru", "IN": "hi",
    "KR": "ko", "TH": "th", "VN": "vi", "TR": "tr",
}

# Approximate rates against USD, used when the live lookup fails.
FALLBACK_RATES: dict[str, float] = {
    "BRL": 5.2, "EUR": 0.85, "GBP": 0.73, "JPY": 110, "CAD": 1.25,
    "AUD": 1.35, "CHF": 0.92, "CNY": 6.4, "INR": 74, "KRW": 1180,
    "SGD": 1.35, "HKD": 7.8, "THB": 33, "MYR": 4.1, "IDR": 14200,
    "PHP": 50, "VND": 23000, "TWD": 28, "AED": 3.67, "SAR": 3.75,
    "ILS": 3.2, "EGP": 15.7, "ZAR": 14.5, "NGN": 411, "RUB": 74,
    "TRY": 8.5, "MXN": 20, "ARS": 98, "CLP": 800,
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$", "EUR": "€", "BRL": "R$", "JPY": "¥", "GBP": "£", "CAD": "C$",
    "AUD": "A$", "CHF": "CHF ", "CNY": "¥", "INR": "₹", "KRW": "₩", "SGD": "S$",
    "HKD": "HK$", "THB": "฿", "MYR": "RM", "IDR": "Rp", "PHP": "₱", "VND": "₫",
    "TWD": "NT$", "AED": "د.إ", "SAR": "﷼", "ILS": "₪", "EGP": "£", "ZAR": "R",
    "NGN": "₦", "RUB": "₽", "TRY": "₺", "MXN": "$", "ARS": "$", "CLP": "$",
}

RTL_LANGUAGES = frozenset({"ar"})


def country_for_language_tag(tag: str | None) -> str:
    """Map a platform language tag such as ``pt-BR`` to a country."""
    if not tag:
        return DEFAULT_COUNTRY
    primary = tag.replace("_", "-").split("-")[0].lower()
    return LANGUAGE_TO_COUNTRY.get(primary, DEFAULT_COUNTRY)


def currency_for_country(country: str, base_currency: str = DEFAULT_BASE_CURRENCY) -> str:
    return COUNTRY_TO_CURRENCY.get(country, base_currency)


def language_for_country(country: str) -> str:
    return COUNTRY_TO_LANGUAGE.get(country, DEFAULT_LANGUAGE)


@dataclass(frozen=True)
class LocalizationContext:
    """Where the visitor is and how prices should be shown to them.

    Built once per session.  ``resolved`` is False only for the
    placeholder used while resolution is still running.
    """

    country_code: str = DEFAULT_COUNTRY
    currency_code: str = DEFAULT_BASE_CURRENCY
    language_code: str = DEFAULT_LANGUAGE
    exchange_rate: float = 1.0
    resolved: bool = False
    base_currency: str = DEFAULT_BASE_CURRENCY

    def __post_init__(self) -> None:
        if len(self.country_code) != 2:
            raise ValidationError(f"Invalid country code: {self.country_code!r}")
        if len(self.currency_code) != 3:
            raise ValidationError(f"Invalid currency code: {self.currency_code!r}")
        if not self.exchange_rate > 0:
            raise ValidationError(
                f"Exchange rate must be positive, got {self.exchange_rate}"
            )

    @property
    def is_rtl(self) -> bool:
        return self.language_code in RTL_LANGUAGES

    @staticmethod
    def pending(base_currency: str = DEFAULT_BASE_CURRENCY) -> LocalizationContext:
        """Placeholder context used until resolution completes."""
        return LocalizationContext(
            currency_code=base_currency,
            base_currency=base_currency,
        )
