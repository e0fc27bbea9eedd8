"""Application service: Checkout Orchestrator.

Drives one CheckoutSession through intake, payment-method creation,
payment-intent creation and confirmation.  Failures end in the FAILED
state with a reason for the customer; they are never raised out of
``submit_payment()``.  The post-success notification is dispatched in
the background and its outcome does not touch the session.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from geocheckout.application.dto import CheckoutStatusDTO
from geocheckout.application.i18n import get_translation
from geocheckout.domain.exceptions import (
    CheckoutInProgressError,
    GatewayRejected,
    OrderEndpointError,
    ValidationError,
)
from geocheckout.domain.model.checkout import (
    CheckoutSession,
    CheckoutState,
    PaymentAttempt,
)
from geocheckout.domain.model.value_objects import CardDetails, Money
from geocheckout.domain.ports.payment_backend import (
    NotificationRequest,
    PaymentBackend,
    PaymentIntentRequest,
)
from geocheckout.domain.ports.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class CheckoutOrchestrator:

    def __init__(
        self,
        gateway: PaymentGateway,
        backend: PaymentBackend,
        session: CheckoutSession | None = None,
        language: str = "en",
    ) -> None:
        self._gateway = gateway
        self._backend = backend
        self._session = session or CheckoutSession()
        self._language = language
        self._in_flight = False
        self._settled: PaymentAttempt | None = None
        self._notifications: set[asyncio.Task] = set()

    @property
    def session(self) -> CheckoutSession:
        return self._session

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    # --- Intake ---------------------------------------------------------------

    def update_customer(self, field_name: str, value: str) -> None:
        self._session.update_customer(field_name, value)

    def submit_customer_info(self, amount: Money) -> CheckoutStatusDTO:
        """Finish intake and open a payment attempt for *amount*."""
        self._session.submit_customer_info(amount)
        return self.status()

    # --- Payment --------------------------------------------------------------

    async def submit_payment(self, card: CardDetails) -> CheckoutStatusDTO:
        """Run payment-method creation, intent creation and confirmation.

        A FAILED session is moved back to payment-method capture first;
        customer data is not collected again.
        """
        async with self._submission_guard():
            if self._session.state == CheckoutState.FAILED:
                self._session.retry()
            if self._session.state != CheckoutState.AWAITING_PAYMENT_METHOD:
                raise ValidationError(
                    f"Cannot submit payment in {self._session.state.value} state"
                )
            await self._run_attempt(card)
        return self.status()

    def retry(self) -> CheckoutStatusDTO:
        self._session.retry()
        return self.status()

    async def _run_attempt(self, card: CardDetails) -> None:
        session = self._session
        attempt = session.attempt
        try:
            payment_method_id = await self._gateway.create_payment_method(
                card, session.customer
            )
            session.payment_method_created(payment_method_id)

            try:
                client_secret = await self._backend.create_payment_intent(
                    PaymentIntentRequest(
                        amount_minor_units=attempt.amount_minor_units,
                        currency=attempt.currency_code.lower(),
                        payment_method_id=payment_method_id,
                        customer=session.customer,
                    )
                )
            except OrderEndpointError as exc:
                logger.warning("Payment intent creation failed: %s", exc)
                # Fixed copy; the endpoint's own detail stays in the log.
                session.fail(get_translation(self._language, "paymentIntentFailed"))
                return
            session.intent_created(client_secret)

            await self._gateway.confirm_payment(client_secret)
            self._settled = session.confirmed()
        except GatewayRejected as exc:
            logger.info("Gateway rejected payment: %s", exc)
            session.fail(str(exc) or get_translation(self._language, "paymentError"))
            return
        except Exception as exc:
            logger.exception("Payment error")
            session.fail(str(exc) or get_translation(self._language, "paymentError"))
            return

        logger.info(
            "Payment succeeded: %s %s via %s",
            attempt.amount_minor_units,
            attempt.currency_code,
            attempt.payment_method_id,
        )
        self._dispatch_notification(self._settled)

    # --- Notification ---------------------------------------------------------

    def _dispatch_notification(self, attempt: PaymentAttempt) -> None:
        request = NotificationRequest(
            amount_minor_units=attempt.amount_minor_units,
            currency=attempt.currency_code.lower(),
            payment_method_id=attempt.payment_method_id,
            customer=self._session.customer,
        )
        task = asyncio.create_task(self._notify(request))
        self._notifications.add(task)
        task.add_done_callback(self._notifications.discard)

    async def _notify(self, request: NotificationRequest) -> None:
        try:
            await self._backend.send_notification(request)
        except Exception:
            logger.warning(
                "Notification for payment method %s failed",
                request.payment_method_id,
                exc_info=True,
            )

    async def flush_notifications(self) -> None:
        """Wait for background notifications, e.g. before the loop closes."""
        if self._notifications:
            await asyncio.gather(*self._notifications)

    # --- Internal helpers -----------------------------------------------------

    @asynccontextmanager
    async def _submission_guard(self) -> AsyncIterator[None]:
        if self._in_flight:
            raise CheckoutInProgressError("A payment is already being processed")
        self._in_flight = True
        try:
            yield
        finally:
            self._in_flight = False

    def status(self) -> CheckoutStatusDTO:
        session = self._session
        attempt = session.attempt or self._settled
        return CheckoutStatusDTO(
            state=session.state.value,
            history=[state.value for state in session.history],
            amount_minor_units=attempt.amount_minor_units if attempt else None,
            currency=attempt.currency_code if attempt else None,
            payment_method_id=attempt.payment_method_id if attempt else None,
            failure_reason=session.failure_reason,
        )
