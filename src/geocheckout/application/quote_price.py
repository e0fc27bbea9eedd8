"""Application service: Price Quote use case.

Turns the base-currency product prices into what the visitor sees and
what the gateway will be asked to charge.  The discount is computed
from the converted amounts.
"""

from __future__ import annotations

from dataclasses import dataclass

from geocheckout.application.dto import PriceQuoteDTO
from geocheckout.application.i18n import format_currency
from geocheckout.domain.exceptions import ValidationError
from geocheckout.domain.model.localization import LocalizationContext
from geocheckout.domain.model.value_objects import Money
from geocheckout.domain.service.currency_converter import (
    convert,
    discount_percentage,
)


@dataclass(frozen=True)
class ProductPricing:
    """Base-currency prices as authored by the operator."""

    original_price: float
    sale_price: float

    def __post_init__(self) -> None:
        if self.sale_price <= 0 or self.original_price <= 0:
            raise ValidationError("Prices must be positive")
        if self.sale_price > self.original_price:
            raise ValidationError("Sale price cannot exceed the original price")


class PriceQuoteHandler:

    def __init__(self, pricing: ProductPricing) -> None:
        self._pricing = pricing

    def handle(self, context: LocalizationContext) -> PriceQuoteDTO:
        original = convert(self._pricing.original_price, context)
        sale = convert(self._pricing.sale_price, context)
        currency = context.currency_code

        return PriceQuoteDTO(
            currency=currency,
            language=context.language_code,
            original_price=original,
            sale_price=sale,
            original_display=format_currency(original, currency),
            sale_display=format_currency(sale, currency),
            discount_percentage=discount_percentage(original, sale),
            charge_amount_minor_units=Money.of(sale, currency).minor_units,
        )

    def charge_amount(self, context: LocalizationContext) -> Money:
        """The sale price in the visitor's currency, as it will be charged."""
        return Money.of(convert(self._pricing.sale_price, context), context.currency_code)
