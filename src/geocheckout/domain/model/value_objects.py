"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from geocheckout.domain.exceptions import ValidationError
from geocheckout.domain.model.localization import CURRENCY_SYMBOLS


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point drift once an amount has been
    converted and rounded to cents.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        if len(self.currency) != 3 or not self.currency.isalpha():
            raise ValidationError(f"Invalid currency code: {self.currency!r}")

    @property
    def minor_units(self) -> int:
        """Amount in the smallest denomination, as sent to the gateway."""
        return int((self.amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        symbol = CURRENCY_SYMBOLS.get(self.currency, f"{self.currency} ")
        return f"{symbol}{self.amount:,.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency.upper())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class CustomerInfo:
    """Who is paying. Filled in field by field during intake."""

    name: str = ""
    email: str = ""
    phone: str = ""

    @property
    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("name", "email", "phone")
            if not getattr(self, name).strip()
        ]

    def with_field(self, name: str, value: str) -> CustomerInfo:
        if name not in ("name", "email", "phone"):
            raise ValidationError(f"Unknown customer field '{name}'")
        return replace(self, **{name: value})

    def as_payload(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email, "phone": self.phone}


@dataclass(frozen=True)
class CardDetails:
    """Raw card data captured for tokenization.

    Never persisted; only handed to the payment gateway.
    """

    number: str = field(repr=False)
    exp_month: int
    exp_year: int
    cvc: str = field(repr=False)

    def __post_init__(self) -> None:
        digits = self.number.replace(" ", "")
        if not digits.isdigit() or not 12 <= len(digits) <= 19:
            raise ValidationError("Card number must be 12 to 19 digits")
        if not 1 <= self.exp_month <= 12:
            raise ValidationError(f"Invalid expiry month: {self.exp_month}")
        if not self.cvc.isdigit() or len(self.cvc) not in (3, 4):
            raise ValidationError("CVC must be 3 or 4 digits")
        object.__setattr__(self, "number", digits)

    @property
    def last4(self) -> str:
        return self.number[-4:]
