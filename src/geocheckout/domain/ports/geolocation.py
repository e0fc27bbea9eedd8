"""Abstract port for IP-based geolocation."""

from __future__ import annotations

from abc import ABC, abstractmethod


class GeolocationProvider(ABC):

    @abstractmethod
    async def lookup_country(self) -> str | None:
        """Return the visitor's 2-letter country code.

        Returns None when the service answered without a country.
        Raises LookupUnavailable when the service could not be reached.
        """
