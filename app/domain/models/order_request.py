"""
Checkout request models.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OrderLineRequest:
    """A requested product and quantity from the customer's cart."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderRequest:
    """
    A customer's checkout request.

    Attributes:
        customer_id: Customer placing the order
        items: Requested lines in cart order
    """

    customer_id: int
    items: list[OrderLineRequest] = field(default_factory=list)
