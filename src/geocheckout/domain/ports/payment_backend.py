"""Abstract port for the operator's order and notification endpoints."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from geocheckout.domain.model.value_objects import CustomerInfo


@dataclass(frozen=True)
class PaymentIntentRequest:
    amount_minor_units: int
    currency: str  # lowercase, e.g. "brl"
    payment_method_id: str
    customer: CustomerInfo

    def to_payload(self) -> dict:
        return {
            "amount": self.amount_minor_units,
            "currency": self.currency,
            "payment_method_id": self.payment_method_id,
            "customer_data": self.customer.as_payload(),
        }


@dataclass(frozen=True)
class NotificationRequest:
    amount_minor_units: int
    currency: str
    payment_method_id: str
    customer: CustomerInfo

    def to_payload(self) -> dict:
        return {
            "customer_data": self.customer.as_payload(),
            "amount": self.amount_minor_units,
            "currency": self.currency,
            "payment_method_id": self.payment_method_id,
        }


class PaymentBackend(ABC):

    @abstractmethod
    async def create_payment_intent(self, request: PaymentIntentRequest) -> str:
        """Return the client secret for a new payment intent.

        Raises OrderEndpointError on any non-success answer.
        """

    @abstractmethod
    async def send_notification(self, request: NotificationRequest) -> None:
        """Tell the operator a payment succeeded.

        Raises NotificationError when delivery fails.
        """
