"""
Commission domain model.

A commission is the marketplace's cut on one order item, computed from the
seller's commission rate captured when the order was placed.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from app.domain.value_objects import CommissionStatus, calculate_commission

from .catalog import Seller
from .order_item import OrderItem


@dataclass
class Commission:
    """
    Marketplace commission ledger entry for one order item.

    Attributes:
        order_item_id: Item the commission was earned on
        store_id: Seller that owes the commission
        commission_rate: Rate (percent) captured at order time
        commission_amount: Commission in cents
        status: pending, paid or cancelled
        paid_at: When the commission was settled
        id: Commission ID (None until persisted)
    """

    order_item_id: int
    store_id: int
    commission_rate: Decimal
    commission_amount: int
    status: CommissionStatus = CommissionStatus.PENDING
    paid_at: datetime | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if self.commission_amount < 0:
            raise ValueError(f"Commission amount cannot be negative: {self.commission_amount}")
        self.status = CommissionStatus.parse(self.status)

    @classmethod
    def for_order_item(cls, item: OrderItem, seller: Seller) -> "Commission":
        """Build the pending commission for a persisted order item."""
        if item.id is None:
            raise ValueError("Commission requires a persisted order item")

        return cls(
            order_item_id=item.id,
            store_id=seller.id,
            commission_rate=seller.commission_rate,
            commission_amount=calculate_commission(item.total_price, seller.commission_rate),
        )

    def mark_as_paid(self) -> None:
        self.status.ensure_transition(CommissionStatus.PAID, entity="commission", entity_id=self.id)
        now = datetime.now(UTC)
        self.status = CommissionStatus.PAID
        self.paid_at = now
        self.updated_at = now

    def mark_as_cancelled(self) -> None:
        self.status.ensure_transition(CommissionStatus.CANCELLED, entity="commission", entity_id=self.id)
        self.status = CommissionStatus.CANCELLED
        self.updated_at = datetime.now(UTC)
