"""
Parent order domain model (Aggregate Root).

A parent order is the checkout-level record the customer sees. Its total is
the sum of its store orders' totals.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from app.domain.value_objects import Money, ParentOrderStatus


@dataclass
class ParentOrder:
    """
    Domain model representing a checkout-level order.

    Attributes:
        customer_id: Customer that placed the order
        order_number: Globally unique order number
        total_amount: Sum of store order totals, in cents
        currency: ISO currency code
        status: Lifecycle status
        id: Order ID (None until persisted)
        created_at: Creation timestamp
        updated_at: Last modification timestamp
    """

    customer_id: int
    order_number: str
    total_amount: int = 0
    currency: str = "USD"
    status: ParentOrderStatus = ParentOrderStatus.PENDING
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate order data after initialization."""
        if not self.order_number:
            raise ValueError("Order number is required")

        if self.total_amount < 0:
            raise ValueError(f"Order total cannot be negative: {self.total_amount}")

        self.status = ParentOrderStatus.parse(self.status)

    @property
    def total(self) -> Money:
        return Money(amount_cents=self.total_amount, currency=self.currency)

    def change_status(self, status: str | ParentOrderStatus) -> None:
        """
        Move the order to a new status.

        Raises:
            ValidationException: If the status is unknown
            InvalidStatusTransitionException: If the transition is not allowed
        """
        target = ParentOrderStatus.parse(status)
        self.status.ensure_transition(target, entity="parent_order", entity_id=self.id)
        self.status = target
        self.updated_at = datetime.now(UTC)
