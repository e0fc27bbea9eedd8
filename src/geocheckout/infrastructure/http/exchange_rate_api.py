"""httpx-backed ExchangeRateProvider for ``/latest/<BASE>`` style services."""

from __future__ import annotations

import httpx

from geocheckout.domain.exceptions import LookupUnavailable
from geocheckout.domain.ports.exchange_rates import ExchangeRateProvider


class ExchangeRateApi(ExchangeRateProvider):

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def latest_rates(self, base_currency: str) -> dict[str, float]:
        try:
            response = await self._client.get(f"{self._base_url}/{base_currency}")
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise LookupUnavailable(f"Exchange rate lookup failed: {exc}") from exc

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict):
            raise LookupUnavailable("Exchange rate response has no 'rates' mapping")
        return rates
