"""Domain service: Currency Converter.

Acquires an exchange rate for a target currency and converts base
prices with it.  Rate acquisition never raises: a failed or incomplete
live lookup falls back to the static table, and an unknown currency
falls back to a rate of 1.

Rounding follows the half-up rule used for display so that the shown
price and the charged price agree to the cent.
"""

from __future__ import annotations

import logging
import math

from geocheckout.domain.exceptions import LookupUnavailable
from geocheckout.domain.model.localization import FALLBACK_RATES, LocalizationContext
from geocheckout.domain.ports.exchange_rates import ExchangeRateProvider

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def convert(amount: float, context: LocalizationContext) -> float:
    """Convert a base-currency *amount* into the context's currency, in cents."""
    return round_half_up(amount * context.exchange_rate * 100) / 100


def discount_percentage(original: float, sale: float) -> int:
    """Whole-number discount; pass amounts that are already converted."""
    if original <= 0:
        return 0
    return round_half_up(((original - sale) / original) * 100)


class CurrencyConverter:

    def __init__(
        self,
        rate_provider: ExchangeRateProvider,
        base_currency: str = "USD",
    ) -> None:
        self._rate_provider = rate_provider
        self._base_currency = base_currency

    @property
    def base_currency(self) -> str:
        return self._base_currency

    async def acquire_rate(self, target_currency: str) -> float:
        """Return the rate from the base currency to *target_currency*.

        Tiers: same currency -> 1 without a network call; live rate;
        static fallback table; 1.
        """
        if target_currency == self._base_currency:
            return 1.0

        try:
            logger.info("[GEOLOCATION] Fetching exchange rate for %s", target_currency)
            rates = await self._rate_provider.latest_rates(self._base_currency)
        except LookupUnavailable as exc:
            logger.info(
                "[GEOLOCATION] Exchange rate fetch failed (%s), using fallback rates",
                exc,
            )
            return self._fallback_rate(target_currency)

        rate = rates.get(target_currency)
        if not _is_usable(rate):
            logger.info(
                "[GEOLOCATION] No usable live rate for %s, using fallback rates",
                target_currency,
            )
            return self._fallback_rate(target_currency)
        return float(rate)

    @staticmethod
    def _fallback_rate(currency: str) -> float:
        return float(FALLBACK_RATES.get(currency, 1.0))


def _is_usable(rate: object) -> bool:
    return (
        isinstance(rate, (int, float))
        and not isinstance(rate, bool)
        and math.isfinite(rate)
        and rate > 0
    )
