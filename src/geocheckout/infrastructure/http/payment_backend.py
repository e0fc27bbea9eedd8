"""httpx-backed PaymentBackend for the operator's API.

``POST /api/create-payment-intent`` must answer 200 with a
``client_secret``; anything else is an OrderEndpointError.
``POST /api/send-notification`` is best-effort.
"""

from __future__ import annotations

import logging

import httpx

from geocheckout.domain.exceptions import NotificationError, OrderEndpointError
from geocheckout.domain.ports.payment_backend import (
    NotificationRequest,
    PaymentBackend,
    PaymentIntentRequest,
)

logger = logging.getLogger(__name__)


class HttpPaymentBackend(PaymentBackend):

    def __init__(self, client: httpx.AsyncClient, api_url: str) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")

    async def create_payment_intent(self, request: PaymentIntentRequest) -> str:
        try:
            response = await self._client.post(
                f"{self._api_url}/api/create-payment-intent",
                json=request.to_payload(),
            )
        except httpx.HTTPError as exc:
            raise OrderEndpointError(None, str(exc)) from exc

        if response.status_code != 200:
            raise OrderEndpointError(response.status_code, response.text[:200])

        try:
            client_secret = response.json().get("client_secret")
        except (ValueError, AttributeError) as exc:
            raise OrderEndpointError(200, "response body is not a JSON object") from exc
        if not client_secret:
            raise OrderEndpointError(200, "response has no client_secret")
        return client_secret

    async def send_notification(self, request: NotificationRequest) -> None:
        try:
            response = await self._client.post(
                f"{self._api_url}/api/send-notification",
                json=request.to_payload(),
            )
        except httpx.HTTPError as exc:
            raise NotificationError(f"Notification not delivered: {exc}") from exc
        logger.debug("Notification endpoint answered %s", response.status_code)
