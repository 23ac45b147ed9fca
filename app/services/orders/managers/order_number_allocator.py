"""OrderNumberAllocator service - race-free order numbering."""

import logging

from app.services.orders.interfaces import UnitOfWork

logger = logging.getLogger(__name__)

PARENT_ORDER_SCOPE = "parent_order"


class OrderNumberAllocator:
    """
    Allocates order numbers from database counters.

    Numbers come from ``order_number_sequences`` inside the caller's unit of
    work. A number is only taken once that transaction commits, and a rolled
    back transaction never persists the number it drew.
    """

    def __init__(self, unit_of_work: UnitOfWork, prefix: str = "ORD"):
        self.uow = unit_of_work
        self.prefix = prefix

    async def next_parent_order_number(self) -> str:
        """Globally unique parent order number, e.g. ``ORD-00000042``."""
        value = await self.uow.sequences.next_value(PARENT_ORDER_SCOPE)
        return f"{self.prefix}-{value:08d}"

    async def next_store_order_number(self, parent_order_id: int, store_id: int) -> str:
        """Store order number unique within ``(parent_order_id, store_id)``, e.g. ``ORD-42-7-01``."""
        value = await self.uow.sequences.next_value(store_order_scope(parent_order_id, store_id))
        return f"{self.prefix}-{parent_order_id}-{store_id}-{value:02d}"


def store_order_scope(parent_order_id: int, store_id: int) -> str:
    return f"store_order:{parent_order_id}:{store_id}"
