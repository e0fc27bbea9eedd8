"""CheckoutSession aggregate — one customer paying for one product.

The session owns the customer data, the current payment attempt and the
checkout state machine.  Transitions only ever move forward, except
that ``fail()`` is reachable from every in-flight state and ``retry()``
moves a failed session back to payment-method capture.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from geocheckout.domain.exceptions import ValidationError
from geocheckout.domain.model.value_objects import CustomerInfo, Money


class CheckoutState(Enum):
    COLLECTING_INFO = "COLLECTING_INFO"
    AWAITING_PAYMENT_METHOD = "AWAITING_PAYMENT_METHOD"
    CREATING_INTENT = "CREATING_INTENT"
    CONFIRMING = "CONFIRMING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


# States in which a payment request may be outstanding.
IN_FLIGHT_STATES = frozenset({
    CheckoutState.AWAITING_PAYMENT_METHOD,
    CheckoutState.CREATING_INTENT,
    CheckoutState.CONFIRMING,
})


@dataclass
class PaymentAttempt:
    """One try at moving money.

    The amount is fixed when intake completes; the ids are filled in as
    the gateway and order endpoint answer.
    """

    amount: Money
    payment_method_id: str | None = None
    intent_client_secret: str | None = field(default=None, repr=False)
    failure_reason: str | None = None

    @property
    def amount_minor_units(self) -> int:
        return self.amount.minor_units

    @property
    def currency_code(self) -> str:
        return self.amount.currency


@dataclass
class CheckoutSession:
    """Aggregate root for a checkout.

    ``history`` records every state entered, in order, starting with
    COLLECTING_INFO.
    """

    customer: CustomerInfo = field(default_factory=CustomerInfo)
    state: CheckoutState = CheckoutState.COLLECTING_INFO
    attempt: PaymentAttempt | None = None
    history: list[CheckoutState] = field(
        default_factory=lambda: [CheckoutState.COLLECTING_INFO]
    )
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Intake ---------------------------------------------------------------

    def update_customer(self, name: str, value: str) -> None:
        """Change one customer field; only allowed during intake."""
        if self.state != CheckoutState.COLLECTING_INFO:
            raise ValidationError(
                "Customer details are frozen once checkout has moved past intake"
            )
        self.customer = self.customer.with_field(name, value)

    def submit_customer_info(self, amount: Money) -> None:
        """Transition COLLECTING_INFO -> AWAITING_PAYMENT_METHOD.

        Creates the payment attempt for *amount*.
        """
        self._expect(CheckoutState.COLLECTING_INFO)
        missing = self.customer.missing_fields
        if missing:
            raise ValidationError(
                f"Missing required customer fields: {', '.join(missing)}"
            )
        if amount.minor_units <= 0:
            raise ValidationError("Charge amount must be positive")
        self.attempt = PaymentAttempt(amount=amount)
        self._enter(CheckoutState.AWAITING_PAYMENT_METHOD)

    # --- Payment --------------------------------------------------------------

    def payment_method_created(self, payment_method_id: str) -> None:
        """Transition AWAITING_PAYMENT_METHOD -> CREATING_INTENT."""
        self._expect(CheckoutState.AWAITING_PAYMENT_METHOD)
        self._current_attempt().payment_method_id = payment_method_id
        self._enter(CheckoutState.CREATING_INTENT)

    def intent_created(self, client_secret: str) -> None:
        """Transition CREATING_INTENT -> CONFIRMING."""
        self._expect(CheckoutState.CREATING_INTENT)
        self._current_attempt().intent_client_secret = client_secret
        self._enter(CheckoutState.CONFIRMING)

    def confirmed(self) -> PaymentAttempt:
        """Transition CONFIRMING -> SUCCEEDED.

        The settled attempt is removed from the session and returned.
        """
        self._expect(CheckoutState.CONFIRMING)
        settled = self._current_attempt()
        self.attempt = None
        self._enter(CheckoutState.SUCCEEDED)
        return settled

    def fail(self, reason: str) -> None:
        """Move any in-flight state to FAILED, recording *reason*."""
        if self.state not in IN_FLIGHT_STATES:
            raise ValidationError(
                f"Cannot fail checkout in {self.state.value} state"
            )
        self._current_attempt().failure_reason = reason
        self._enter(CheckoutState.FAILED)

    def retry(self) -> None:
        """Transition FAILED -> AWAITING_PAYMENT_METHOD.

        Customer data is kept; the attempt is replaced by a fresh one for
        the same amount.
        """
        self._expect(CheckoutState.FAILED)
        self.attempt = PaymentAttempt(amount=self._current_attempt().amount)
        self._enter(CheckoutState.AWAITING_PAYMENT_METHOD)

    # --- Computed properties --------------------------------------------------

    @property
    def failure_reason(self) -> str | None:
        if self.state != CheckoutState.FAILED or self.attempt is None:
            return None
        return self.attempt.failure_reason

    # --- Internal helpers -----------------------------------------------------

    def _expect(self, expected: CheckoutState) -> None:
        if self.state != expected:
            raise ValidationError(
                f"Checkout is in {self.state.value} state, expected {expected.value}"
            )

    def _enter(self, state: CheckoutState) -> None:
        self.state = state
        self.history.append(state)

    def _current_attempt(self) -> PaymentAttempt:
        if self.attempt is None:
            raise ValidationError("No payment attempt in progress")
        return self.attempt
