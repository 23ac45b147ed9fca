"""
Repository for store orders (per-seller suborders).
"""

from typing import Optional

from sqlalchemy import select

from app.db.models import StoreOrderRecord
from app.domain.models import StoreOrder
from app.domain.value_objects import StoreOrderStatus

from .base import BaseRepository, log_operation


def to_domain(record: StoreOrderRecord) -> StoreOrder:
    return StoreOrder(
        id=record.id,
        parent_order_id=record.parent_order_id,
        customer_id=record.customer_id,
        store_id=record.store_id,
        order_number=record.order_number,
        total_amount=record.total_amount,
        currency=record.currency,
        status=StoreOrderStatus(record.status),
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class StoreOrderRepository(BaseRepository):
    @log_operation()
    async def create(self, store_order: StoreOrder) -> StoreOrder:
        record = StoreOrderRecord(
            parent_order_id=store_order.parent_order_id,
            customer_id=store_order.customer_id,
            store_id=store_order.store_id,
            order_number=store_order.order_number,
            total_amount=store_order.total_amount,
            currency=store_order.currency,
            status=store_order.status.value,
            created_at=store_order.created_at,
            updated_at=store_order.updated_at,
        )
        self.session.add(record)
        await self.session.flush()

        store_order.id = record.id
        return store_order

    @log_operation()
    async def update(self, store_order: StoreOrder) -> StoreOrder:
        record = await self.session.get(StoreOrderRecord, store_order.id)
        if record is None:
            raise ValueError(f"Store order {store_order.id} does not exist")

        record.total_amount = store_order.total_amount
        record.status = store_order.status.value
        record.updated_at = store_order.updated_at
        await self.session.flush()
        return store_order

    @log_operation()
    async def find_by_id(self, store_order_id: int) -> Optional[StoreOrder]:
        record = await self.session.get(StoreOrderRecord, store_order_id)
        return to_domain(record) if record else None

    @log_operation()
    async def find_by_parent_order_id(self, parent_order_id: int) -> list[StoreOrder]:
        """Suborders of one parent, oldest first."""
        result = await self.session.execute(
            select(StoreOrderRecord)
            .where(StoreOrderRecord.parent_order_id == parent_order_id)
            .order_by(StoreOrderRecord.created_at.asc(), StoreOrderRecord.id.asc())
        )
        return [to_domain(record) for record in result.scalars()]

    @log_operation()
    async def find_by_store_id(self, store_id: int, limit: int, offset: int = 0) -> list[StoreOrder]:
        """Suborders of one seller, newest first."""
        result = await self.session.execute(
            select(StoreOrderRecord)
            .where(StoreOrderRecord.store_id == store_id)
            .order_by(StoreOrderRecord.created_at.desc(), StoreOrderRecord.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [to_domain(record) for record in result.scalars()]
