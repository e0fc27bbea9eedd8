"""In-memory fakes for every port, for testing.

These implement the same abstract interfaces as the httpx adapters but
answer from memory. No network, no side effects beyond recording calls.
"""

from __future__ import annotations

from types import SimpleNamespace

import stripe

from geocheckout.domain.exceptions import (
    GatewayRejected,
    LookupUnavailable,
    NotificationError,
    OrderEndpointError,
)
from geocheckout.domain.model.security import ViewportGeometry
from geocheckout.domain.model.value_objects import CardDetails, CustomerInfo
from geocheckout.domain.ports.exchange_rates import ExchangeRateProvider
from geocheckout.domain.ports.geolocation import GeolocationProvider
from geocheckout.domain.ports.page import PageEnvironment
from geocheckout.domain.ports.payment_backend import (
    NotificationRequest,
    PaymentBackend,
    PaymentIntentRequest,
)
from geocheckout.domain.ports.payment_gateway import PaymentGateway


class FakeGeolocation(GeolocationProvider):

    def __init__(self, country: str | None = None, unavailable: bool = False) -> None:
        self._country = country
        self._unavailable = unavailable
        self.calls = 0

    async def lookup_country(self) -> str | None:
        self.calls += 1
        if self._unavailable:
            raise LookupUnavailable("geolocation down")
        return self._country


class FakeExchangeRates(ExchangeRateProvider):

    def __init__(
        self, rates: dict[str, float] | None = None, unavailable: bool = False
    ) -> None:
        self._rates = rates or {}
        self._unavailable = unavailable
        self.requested_bases: list[str] = []

    async def latest_rates(self, base_currency: str) -> dict[str, float]:
        self.requested_bases.append(base_currency)
        if self._unavailable:
            raise LookupUnavailable("exchange rates down")
        return dict(self._rates)


class FakeGateway(PaymentGateway):

    def __init__(
        self,
        payment_method_id: str = "pm_123",
        create_error: str | None = None,
        confirm_error: str | None = None,
    ) -> None:
        self._payment_method_id = payment_method_id
        self.create_error = create_error
        self.confirm_error = confirm_error
        self.created: list[tuple[CardDetails, CustomerInfo]] = []
        self.confirmed: list[str] = []

    async def create_payment_method(
        self, card: CardDetails, billing: CustomerInfo
    ) -> str:
        self.created.append((card, billing))
        if self.create_error:
            raise GatewayRejected(self.create_error)
        return self._payment_method_id

    async def confirm_payment(self, client_secret: str) -> None:
        self.confirmed.append(client_secret)
        if self.confirm_error:
            raise GatewayRejected(self.confirm_error)


class FakeStripeApi:
    """Stands in for the Stripe SDK calls the gateway adapter makes.

    ``install()`` patches ``stripe.PaymentMethod.create`` and
    ``stripe.PaymentIntent.confirm``; every call is recorded with its
    keyword arguments.
    """

    def __init__(
        self,
        payment_method_id: str = "pm_1",
        intent_status: str = "succeeded",
        error: Exception | None = None,
    ) -> None:
        self.payment_method_id = payment_method_id
        self.intent_status = intent_status
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def install(self, monkeypatch) -> FakeStripeApi:
        monkeypatch.setattr(stripe.PaymentMethod, "create", self.create_payment_method)
        monkeypatch.setattr(stripe.PaymentIntent, "confirm", self.confirm_intent)
        return self

    def create_payment_method(self, **params):
        self.calls.append(("payment_methods", params))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(id=self.payment_method_id)

    def confirm_intent(self, intent: str, **params):
        self.calls.append((f"payment_intents/{intent}/confirm", params))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(id=intent, status=self.intent_status)


class FakeBackend(PaymentBackend):

    def __init__(
        self,
        client_secret: str = "pi_1_secret_abc",
        intent_status: int = 200,
        notification_fails: bool = False,
    ) -> None:
        self._client_secret = client_secret
        self.intent_status = intent_status
        self.notification_fails = notification_fails
        self.intent_requests: list[PaymentIntentRequest] = []
        self.notifications: list[NotificationRequest] = []

    async def create_payment_intent(self, request: PaymentIntentRequest) -> str:
        self.intent_requests.append(request)
        if self.intent_status != 200:
            raise OrderEndpointError(self.intent_status, '{"error": "card_declined"}')
        return self._client_secret

    async def send_notification(self, request: NotificationRequest) -> None:
        self.notifications.append(request)
        if self.notification_fails:
            raise NotificationError("smtp down")


class FakeConsole:

    def __init__(self) -> None:
        self.lines: list[tuple[str, tuple]] = []

    def log(self, *args) -> None:
        self.lines.append(("log", args))

    def warn(self, *args) -> None:
        self.lines.append(("warn", args))

    def error(self, *args) -> None:
        self.lines.append(("error", args))


class FakePage(PageEnvironment):

    def __init__(self) -> None:
        self._console = FakeConsole()
        self.geometry = ViewportGeometry(1200, 900, 1200, 800)
        self.text_selection_enabled = True
        self.reloads = 0
        self.checkpoint_hook = None

    @property
    def console(self) -> FakeConsole:
        return self._console

    def viewport(self) -> ViewportGeometry:
        return self.geometry

    def open_devtools(self) -> None:
        self.geometry = ViewportGeometry(1200, 900, 800, 800)

    def close_devtools(self) -> None:
        self.geometry = ViewportGeometry(1200, 900, 1200, 800)

    def set_text_selection(self, enabled: bool) -> None:
        self.text_selection_enabled = enabled

    def checkpoint(self) -> None:
        if self.checkpoint_hook is not None:
            self.checkpoint_hook()

    def reload(self) -> None:
        self.reloads += 1


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
