"""
Order repositories.

All repositories share the session of the unit of work that created them.
"""

from .commission_repository import CommissionRepository
from .order_item_repository import OrderItemRepository
from .parent_order_repository import ParentOrderRepository
from .sequence_repository import OrderNumberSequenceRepository
from .store_order_repository import StoreOrderRepository

__all__ = [
    "ParentOrderRepository",
    "StoreOrderRepository",
    "OrderItemRepository",
    "CommissionRepository",
    "OrderNumberSequenceRepository",
]
