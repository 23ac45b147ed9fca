"""
Read models returned by order creation and order queries.
"""

from dataclasses import dataclass, field

from .catalog import ProductSnapshot, Seller
from .commission import Commission
from .order_item import OrderItem
from .parent_order import ParentOrder
from .store_order import StoreOrder


@dataclass(frozen=True)
class GroupedLine:
    """A validated cart line, bound to the catalog product it refers to."""

    product_id: int
    quantity: int
    product: ProductSnapshot

    @property
    def store_id(self) -> int:
        # Grouping only produces lines for assigned products
        return self.product.store_id  # type: ignore[return-value]

    @property
    def line_total(self) -> int:
        return self.product.price_cents * self.quantity


@dataclass
class StoreOrderGroup:
    """
    One seller's part of a parent order.

    ``seller`` is None on the read path when the store no longer exists in
    the catalog; ``commissions`` may be empty on the read path.
    """

    store_order: StoreOrder
    items: list[OrderItem] = field(default_factory=list)
    seller: Seller | None = None
    commissions: list[Commission] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


@dataclass
class OrderSummary:
    """A parent order with its store orders, as shown to the customer."""

    parent_order: ParentOrder
    store_orders: list[StoreOrderGroup] = field(default_factory=list)

    @property
    def total_amount(self) -> int:
        return self.parent_order.total_amount

    @property
    def total_stores(self) -> int:
        return len(self.store_orders)


@dataclass
class StoreOrderSummary:
    """A store order as shown to the seller."""

    store_order: StoreOrder
    items: list[OrderItem] = field(default_factory=list)
    seller: Seller | None = None

    @property
    def total_amount(self) -> int:
        return self.store_order.total_amount

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


@dataclass(frozen=True)
class OrderStats:
    """Aggregate parent order statistics."""

    total_orders: int
    total_revenue: int
    pending_orders: int
    processing_orders: int
    completed_orders: int
    cancelled_orders: int


@dataclass(frozen=True)
class CommissionTotals:
    """
    Commission totals for one store, in cents.

    ``total_amount`` excludes cancelled commissions.
    """

    store_id: int
    total_amount: int
    pending_amount: int
    paid_amount: int
    commission_count: int
