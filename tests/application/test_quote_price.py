"""Integration tests for the Price Quote use case."""

import pytest

from geocheckout.application.quote_price import PriceQuoteHandler, ProductPricing
from geocheckout.domain.exceptions import ValidationError
from geocheckout.domain.model.localization import LocalizationContext
from geocheckout.domain.model.value_objects import Money


def _handler() -> PriceQuoteHandler:
    return PriceQuoteHandler(ProductPricing(original_price=297.00, sale_price=97.00))


class TestPriceQuote:

    def test_base_currency_quote(self):
        dto = _handler().handle(LocalizationContext(resolved=True))

        assert dto.original_price == 297.00
        assert dto.sale_price == 97.00
        assert dto.discount_percentage == 67
        assert dto.sale_display == "$97.00"
        assert dto.charge_amount_minor_units == 9700

    def test_brazil_quote(self):
        ctx = LocalizationContext(
            country_code="BR", currency_code="BRL", language_code="pt",
            exchange_rate=5.2, resolved=True,
        )
        dto = _handler().handle(ctx)

        assert dto.original_price == 1544.40
        assert dto.sale_price == 504.40
        assert dto.original_display == "R$1,544.40"
        assert dto.discount_percentage == 67
        assert dto.charge_amount_minor_units == 50440
        assert dto.language == "pt"

    def test_charge_amount_matches_display(self):
        ctx = LocalizationContext(
            country_code="JP", currency_code="JPY", language_code="ja",
            exchange_rate=110, resolved=True,
        )
        handler = _handler()
        assert handler.charge_amount(ctx) == Money.of(10670.0, "JPY")
        assert handler.charge_amount(ctx).minor_units == handler.handle(ctx).charge_amount_minor_units

    def test_sale_above_original_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            ProductPricing(original_price=10, sale_price=20)
