"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import httpx

from geocheckout.application.alert_broker import AlertBroker
from geocheckout.application.checkout_orchestrator import CheckoutOrchestrator
from geocheckout.application.quote_price import PriceQuoteHandler, ProductPricing
from geocheckout.application.resolve_localization import LocalizationResolver
from geocheckout.application.tamper_monitor import TamperMonitor
from geocheckout.domain.service.currency_converter import CurrencyConverter
from geocheckout.infrastructure.config import Settings
from geocheckout.infrastructure.http.exchange_rate_api import ExchangeRateApi
from geocheckout.infrastructure.http.ipapi_geolocation import IpApiGeolocation
from geocheckout.infrastructure.http.payment_backend import HttpPaymentBackend
from geocheckout.infrastructure.http.stripe_gateway import StripeGateway
from geocheckout.infrastructure.page.terminal_page import TerminalPage


def http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.http_timeout)


def localization_resolver(
    settings: Settings,
    client: httpx.AsyncClient,
    platform_language: str | None = None,
) -> LocalizationResolver:
    converter = CurrencyConverter(
        ExchangeRateApi(client, settings.exchange_rate_url),
        base_currency=settings.product.currency,
    )
    return LocalizationResolver(
        IpApiGeolocation(client, settings.geolocation_url),
        converter,
        platform_language=platform_language,
    )


def price_quote_handler(settings: Settings) -> PriceQuoteHandler:
    return PriceQuoteHandler(
        ProductPricing(
            original_price=settings.product.original_price,
            sale_price=settings.product.sale_price,
        )
    )


def checkout_orchestrator(
    settings: Settings,
    client: httpx.AsyncClient,
    language: str = "en",
) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(
        gateway=StripeGateway(settings.publishable_key),
        backend=HttpPaymentBackend(client, settings.api_url),
        language=language,
    )


def tamper_monitor(
    broker: AlertBroker,
    chrome_width: int = 0,
    chrome_height: int = 0,
) -> TamperMonitor:
    return TamperMonitor(TerminalPage(chrome_width, chrome_height), broker)
