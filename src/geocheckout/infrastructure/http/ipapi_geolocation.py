"""httpx-backed GeolocationProvider for ipapi-style JSON services."""

from __future__ import annotations

import logging

import httpx

from geocheckout.domain.exceptions import LookupUnavailable
from geocheckout.domain.ports.geolocation import GeolocationProvider

logger = logging.getLogger(__name__)


class IpApiGeolocation(GeolocationProvider):

    def __init__(self, client: httpx.AsyncClient, url: str) -> None:
        self._client = client
        self._url = url

    async def lookup_country(self) -> str | None:
        try:
            response = await self._client.get(self._url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise LookupUnavailable(f"Geolocation lookup failed: {exc}") from exc

        if not isinstance(payload, dict):
            raise LookupUnavailable("Geolocation lookup returned a non-object body")

        country = payload.get("country_code")
        return country if isinstance(country, str) and country else None
