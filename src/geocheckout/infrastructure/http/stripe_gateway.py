"""PaymentGateway backed by the Stripe SDK.

Only the publishable key is used, so this adapter can do exactly what a
client-side integration can: tokenize a card and confirm an intent by
its client secret.  The SDK blocks, so each call runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

import stripe

from geocheckout.domain.exceptions import GatewayRejected
from geocheckout.domain.model.value_objects import CardDetails, CustomerInfo
from geocheckout.domain.ports.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)

_SECRET_SEPARATOR = "_secret_"
_SETTLED_STATUSES = ("succeeded", "processing")


class StripeGateway(PaymentGateway):

    def __init__(self, publishable_key: str) -> None:
        self._publishable_key = publishable_key

    async def create_payment_method(
        self, card: CardDetails, billing: CustomerInfo
    ) -> str:
        payment_method = await self._call(
            stripe.PaymentMethod.create,
            type="card",
            card={
                "number": card.number,
                "exp_month": card.exp_month,
                "exp_year": card.exp_year,
                "cvc": card.cvc,
            },
            billing_details={
                "name": billing.name,
                "email": billing.email,
                "phone": billing.phone,
            },
        )
        payment_method_id = getattr(payment_method, "id", None)
        if not payment_method_id:
            raise GatewayRejected("The payment gateway did not return a payment method")
        logger.info("Created payment method %s for card ending %s", payment_method_id, card.last4)
        return payment_method_id

    async def confirm_payment(self, client_secret: str) -> None:
        if _SECRET_SEPARATOR not in client_secret:
            raise GatewayRejected("Invalid payment intent client secret")
        intent_id = client_secret.split(_SECRET_SEPARATOR, 1)[0]

        intent = await self._call(
            stripe.PaymentIntent.confirm, intent_id, client_secret=client_secret
        )
        status = getattr(intent, "status", None)
        if status not in _SETTLED_STATUSES:
            raise GatewayRejected(
                f"Payment could not be completed (status: {status or 'unknown'})"
            )

    async def _call(self, method: Callable[..., Any], *args: Any, **params: Any) -> Any:
        try:
            return await asyncio.to_thread(
                method, *args, api_key=self._publishable_key, **params
            )
        except stripe.APIConnectionError as exc:
            logger.warning("Payment gateway unreachable: %s", exc)
            raise GatewayRejected("Could not reach the payment gateway") from exc
        except stripe.StripeError as exc:
            logger.info("Payment gateway refused request: %s", exc)
            raise GatewayRejected(
                exc.user_message or "The payment gateway rejected the request"
            ) from exc
