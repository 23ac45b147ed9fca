"""
Money value object for handling monetary amounts with currency.

Amounts are stored as integer minor units (cents). Conversion to a decimal
display value happens only at the API boundary.
"""

from dataclasses import dataclass
from decimal import Decimal

CENTS_PER_UNIT = 100


@dataclass(frozen=True)
class Money:
    """
    Immutable value object representing a monetary amount with currency.

    Attributes:
        amount_cents: The monetary amount in minor currency units
        currency: ISO 4217 currency code (e.g., "USD")

    Example:
        >>> price = Money(amount_cents=1000, currency="USD")
        >>> total = price * 2 + Money(amount_cents=500)
        >>> str(total)
        'USD 25.00'
    """

    amount_cents: int
    currency: str = "USD"

    def __post_init__(self) -> None:
        """Validate money object after initialization."""
        if isinstance(self.amount_cents, bool) or not isinstance(self.amount_cents, int):
            raise TypeError(f"Money amount must be an integer number of cents, got {type(self.amount_cents)}")

        if self.amount_cents < 0:
            raise ValueError(f"Money amount cannot be negative: {self.amount_cents}")

        if not self.currency or len(self.currency) != 3:
            raise ValueError(f"Invalid currency code: {self.currency}")

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects with the same currency."""
        if not isinstance(other, Money):
            raise TypeError(f"Cannot add Money with {type(other)}")

        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")

        return Money(amount_cents=self.amount_cents + other.amount_cents, currency=self.currency)

    def __mul__(self, quantity: int) -> "Money":
        """Multiply money by an integer quantity."""
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Cannot multiply Money by {type(quantity)}")

        return Money(amount_cents=self.amount_cents * quantity, currency=self.currency)

    def __str__(self) -> str:
        return f"{self.currency} {self.to_decimal()}"

    def to_decimal(self) -> Decimal:
        """Display value in major units with two decimal places."""
        return (Decimal(self.amount_cents) / CENTS_PER_UNIT).quantize(Decimal("0.01"))

    def to_display(self) -> str:
        """Display string without currency, e.g. ``"25.00"``."""
        return str(self.to_decimal())
