"""
Order item (line item) domain model.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass
class OrderItem:
    """
    One product line within a store order.

    ``total_price`` always equals ``unit_price * quantity``; use
    :meth:`create` to build new items so the total is derived, not supplied.

    Attributes:
        store_order_id: Owning store order
        product_id: Catalog product
        quantity: Units ordered (> 0)
        unit_price: Unit price in cents captured at checkout
        total_price: Line total in cents
        id: Item ID (None until persisted)
    """

    store_order_id: int
    product_id: int
    quantity: int
    unit_price: int
    total_price: int
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError(f"Quantity must be positive: {self.quantity}")

        if self.unit_price < 0:
            raise ValueError(f"Unit price cannot be negative: {self.unit_price}")

        if self.total_price != self.unit_price * self.quantity:
            raise ValueError(
                f"Line total {self.total_price} does not match {self.unit_price} x {self.quantity}"
            )

    @classmethod
    def create(cls, store_order_id: int, product_id: int, quantity: int, unit_price: int) -> "OrderItem":
        """Build a new line item, deriving its total from price and quantity."""
        return cls(
            store_order_id=store_order_id,
            product_id=product_id,
            quantity=quantity,
            unit_price=unit_price,
            total_price=unit_price * quantity,
        )
