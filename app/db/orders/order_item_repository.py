"""
Repository for order items.
"""

from sqlalchemy import select

from app.db.models import OrderItemRecord
from app.domain.models import OrderItem

from .base import BaseRepository, log_operation


def to_domain(record: OrderItemRecord) -> OrderItem:
    return OrderItem(
        id=record.id,
        store_order_id=record.store_order_id,
        product_id=record.product_id,
        quantity=record.quantity,
        unit_price=record.unit_price,
        total_price=record.total_price,
        created_at=record.created_at,
    )


class OrderItemRepository(BaseRepository):
    @log_operation()
    async def create(self, item: OrderItem) -> OrderItem:
        record = OrderItemRecord(
            store_order_id=item.store_order_id,
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=item.total_price,
            created_at=item.created_at,
        )
        self.session.add(record)
        await self.session.flush()

        item.id = record.id
        return item

    @log_operation()
    async def find_by_store_order_id(self, store_order_id: int) -> list[OrderItem]:
        result = await self.session.execute(
            select(OrderItemRecord)
            .where(OrderItemRecord.store_order_id == store_order_id)
            .order_by(OrderItemRecord.id.asc())
        )
        return [to_domain(record) for record in result.scalars()]

    @log_operation()
    async def find_by_store_order_ids(self, store_order_ids: list[int]) -> dict[int, list[OrderItem]]:
        """Items grouped by store order, in insertion order."""
        grouped: dict[int, list[OrderItem]] = {store_order_id: [] for store_order_id in store_order_ids}
        if not store_order_ids:
            return grouped

        result = await self.session.execute(
            select(OrderItemRecord)
            .where(OrderItemRecord.store_order_id.in_(store_order_ids))
            .order_by(OrderItemRecord.id.asc())
        )
        for record in result.scalars():
            grouped[record.store_order_id].append(to_domain(record))
        return grouped
