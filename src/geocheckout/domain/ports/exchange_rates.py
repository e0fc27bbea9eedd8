"""Abstract port for the exchange-rate service."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ExchangeRateProvider(ABC):

    @abstractmethod
    async def latest_rates(self, base_currency: str) -> dict[str, float]:
        """Return currency code -> rate relative to *base_currency*.

        Raises LookupUnavailable when the service could not be reached.
        """
