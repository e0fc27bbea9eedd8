"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI
layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class ConfigurationError(DomainException):
    """A setting resolved at startup is unusable."""


class LookupUnavailable(DomainException):
    """A geolocation or exchange-rate lookup could not be completed."""


class PaymentError(DomainException):
    """Base class for failures that end a payment attempt."""


class GatewayRejected(PaymentError):
    """The payment gateway refused to tokenize or confirm.

    The message is human-readable and shown to the customer verbatim.
    """


class OrderEndpointError(PaymentError):
    """The order endpoint did not answer with a client secret."""

    def __init__(self, status_code: int | None, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(
            f"Order endpoint failed (status={status_code}): {detail}".rstrip(": ")
        )


class NotificationError(DomainException):
    """The post-payment notification could not be delivered."""


class CheckoutInProgressError(DomainException):
    """A payment submission is already in flight for this session."""
