"""Application service: Localization Resolver.

Works out the visitor's country, currency and display language, then
asks the Currency Converter for a rate.  Every failure degrades to the
next fallback tier, so ``resolve()`` always returns a usable context.
"""

from __future__ import annotations

import logging

from geocheckout.domain.exceptions import LookupUnavailable
from geocheckout.domain.model.localization import (
    DEFAULT_COUNTRY,
    DEFAULT_LANGUAGE,
    LocalizationContext,
    country_for_language_tag,
    currency_for_country,
    language_for_country,
)
from geocheckout.domain.ports.geolocation import GeolocationProvider
from geocheckout.domain.service.currency_converter import CurrencyConverter

logger = logging.getLogger(__name__)


class LocalizationResolver:

    def __init__(
        self,
        geolocation: GeolocationProvider,
        converter: CurrencyConverter,
        platform_language: str | None = None,
    ) -> None:
        self._geolocation = geolocation
        self._converter = converter
        self._platform_language = platform_language

    async def resolve(self) -> LocalizationContext:
        """Resolve a LocalizationContext; never raises.

        Steps:
        1. IP geolocation (one call, no retry).
        2. On failure, platform language tag -> country, else "US".
        3. Country -> currency and country -> language via static tables.
        4. Currency -> exchange rate via the converter.
        """
        base = self._converter.base_currency
        try:
            logger.info("[GEOLOCATION] Starting location detection...")
            country = await self._detect_country()
            currency = currency_for_country(country, base)
            language = language_for_country(country)
            rate = await self._converter.acquire_rate(currency)
            context = LocalizationContext(
                country_code=country,
                currency_code=currency,
                language_code=language,
                exchange_rate=rate,
                resolved=True,
                base_currency=base,
            )
        except Exception:
            logger.warning(
                "[GEOLOCATION] Resolution failed, using defaults", exc_info=True
            )
            context = LocalizationContext(
                country_code=DEFAULT_COUNTRY,
                currency_code=base,
                language_code=DEFAULT_LANGUAGE,
                exchange_rate=1.0,
                resolved=True,
                base_currency=base,
            )

        logger.info(
            "[GEOLOCATION] Final detection: country=%s currency=%s language=%s rate=%s",
            context.country_code,
            context.currency_code,
            context.language_code,
            context.exchange_rate,
        )
        return context

    async def _detect_country(self) -> str:
        try:
            country = await self._geolocation.lookup_country()
        except LookupUnavailable:
            logger.info("[GEOLOCATION] IP detection failed, trying platform language...")
            return country_for_language_tag(self._platform_language)

        if country and len(country) == 2 and country.isalpha():
            logger.info("[GEOLOCATION] Detected country: %s", country)
            return country.upper()
        return DEFAULT_COUNTRY
