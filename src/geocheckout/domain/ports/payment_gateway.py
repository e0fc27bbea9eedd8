"""Abstract port for the external payment gateway."""

from __future__ import annotations

from abc import ABC, abstractmethod

from geocheckout.domain.model.value_objects import CardDetails, CustomerInfo


class PaymentGateway(ABC):

    @abstractmethod
    async def create_payment_method(
        self, card: CardDetails, billing: CustomerInfo
    ) -> str:
        """Tokenize *card* and return the payment method id.

        Raises GatewayRejected with a customer-facing message.
        """

    @abstractmethod
    async def confirm_payment(self, client_secret: str) -> None:
        """Confirm the payment intent identified by *client_secret*.

        Raises GatewayRejected with a customer-facing message.
        """
