"""
Domain models for business entities.

These models represent core business concepts and contain
business logic and invariants.
"""

from .catalog import ProductSnapshot, Seller
from .commission import Commission
from .order_item import OrderItem
from .order_request import OrderLineRequest, OrderRequest
from .order_summary import (
    CommissionTotals,
    GroupedLine,
    OrderStats,
    OrderSummary,
    StoreOrderGroup,
    StoreOrderSummary,
)
from .parent_order import ParentOrder
from .store_order import StoreOrder

__all__ = [
    "ProductSnapshot",
    "Seller",
    "ParentOrder",
    "StoreOrder",
    "OrderItem",
    "Commission",
    "OrderLineRequest",
    "OrderRequest",
    "GroupedLine",
    "StoreOrderGroup",
    "OrderSummary",
    "StoreOrderSummary",
    "OrderStats",
    "CommissionTotals",
]
