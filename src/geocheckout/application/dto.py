"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceQuoteDTO:
    """Output: localized prices as displayed to the visitor."""

    currency: str
    language: str
    original_price: float
    sale_price: float
    original_display: str  # formatted, e.g. "R$1,544.40"
    sale_display: str
    discount_percentage: int
    charge_amount_minor_units: int


@dataclass(frozen=True)
class CheckoutStatusDTO:
    """Output: where a checkout stands after a command."""

    state: str
    history: list[str]
    amount_minor_units: int | None
    currency: str | None
    payment_method_id: str | None
    failure_reason: str | None
