"""
Interfaces/Protocols for order services (Dependency Inversion Principle).

These protocols define the contracts order services depend on, so the
catalog and the persistence layer can be swapped for fakes in tests.
"""

from typing import Callable, Optional, Protocol

from app.db.orders import (
    CommissionRepository,
    OrderItemRepository,
    OrderNumberSequenceRepository,
    ParentOrderRepository,
    StoreOrderRepository,
)
from app.domain.models import ProductSnapshot, Seller


class ProductLookup(Protocol):
    """Read-only access to catalog products."""

    async def find_by_id(self, product_id: int) -> Optional[ProductSnapshot]:
        """Return the product snapshot, or None if it does not exist."""
        ...


class SellerLookup(Protocol):
    """Read-only access to catalog sellers."""

    async def find_by_id(self, store_id: int) -> Optional[Seller]:
        """Return the seller, or None if it does not exist."""
        ...


class UnitOfWork(Protocol):
    """One transaction over the order repositories."""

    parent_orders: ParentOrderRepository
    store_orders: StoreOrderRepository
    order_items: OrderItemRepository
    commissions: CommissionRepository
    sequences: OrderNumberSequenceRepository

    async def __aenter__(self) -> "UnitOfWork": ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


UnitOfWorkFactory = Callable[[], UnitOfWork]
