"""
Store order domain model.

A store order is the per-seller part of a parent order. Its total is the sum
of its items' total prices.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from app.domain.value_objects import Money, StoreOrderStatus


@dataclass
class StoreOrder:
    """
    Domain model representing a seller's suborder.

    Attributes:
        parent_order_id: Owning parent order
        customer_id: Customer that placed the order
        store_id: Seller fulfilling this suborder
        order_number: Number unique within (parent_order_id, store_id)
        total_amount: Sum of item totals, in cents
        currency: ISO currency code
        status: Lifecycle status
        id: Store order ID (None until persisted)
    """

    parent_order_id: int
    customer_id: int
    store_id: int
    order_number: str
    total_amount: int = 0
    currency: str = "USD"
    status: StoreOrderStatus = StoreOrderStatus.PENDING
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.order_number:
            raise ValueError("Order number is required")

        if self.total_amount < 0:
            raise ValueError(f"Store order total cannot be negative: {self.total_amount}")

        self.status = StoreOrderStatus.parse(self.status)

    @property
    def total(self) -> Money:
        return Money(amount_cents=self.total_amount, currency=self.currency)

    def change_status(self, status: str | StoreOrderStatus) -> None:
        """
        Move the store order to a new status.

        Raises:
            ValidationException: If the status is unknown
            InvalidStatusTransitionException: If the transition is not allowed
        """
        target = StoreOrderStatus.parse(status)
        self.status.ensure_transition(target, entity="store_order", entity_id=self.id)
        self.status = target
        self.updated_at = datetime.now(UTC)
