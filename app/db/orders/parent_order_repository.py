"""
Repository for parent orders.
"""

from typing import Optional

from sqlalchemy import func, select

from app.db.models import ParentOrderRecord
from app.domain.models import ParentOrder
from app.domain.value_objects import ParentOrderStatus

from .base import BaseRepository, log_operation


def to_domain(record: ParentOrderRecord) -> ParentOrder:
    return ParentOrder(
        id=record.id,
        customer_id=record.customer_id,
        order_number=record.order_number,
        total_amount=record.total_amount,
        currency=record.currency,
        status=ParentOrderStatus(record.status),
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class ParentOrderRepository(BaseRepository):
    """Persistence for checkout-level orders."""

    @log_operation()
    async def create(self, order: ParentOrder) -> ParentOrder:
        record = ParentOrderRecord(
            customer_id=order.customer_id,
            order_number=order.order_number,
            total_amount=order.total_amount,
            currency=order.currency,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
        self.session.add(record)
        await self.session.flush()

        order.id = record.id
        return order

    @log_operation()
    async def update(self, order: ParentOrder) -> ParentOrder:
        record = await self.session.get(ParentOrderRecord, order.id)
        if record is None:
            raise ValueError(f"Parent order {order.id} does not exist")

        record.total_amount = order.total_amount
        record.status = order.status.value
        record.updated_at = order.updated_at
        await self.session.flush()
        return order

    @log_operation()
    async def find_by_id(self, order_id: int) -> Optional[ParentOrder]:
        record = await self.session.get(ParentOrderRecord, order_id)
        return to_domain(record) if record else None

    @log_operation()
    async def find_by_order_number(self, order_number: str) -> Optional[ParentOrder]:
        result = await self.session.execute(
            select(ParentOrderRecord).where(ParentOrderRecord.order_number == order_number)
        )
        record = result.scalar_one_or_none()
        return to_domain(record) if record else None

    @log_operation()
    async def find_by_customer_id(self, customer_id: int, limit: int, offset: int = 0) -> list[ParentOrder]:
        """Newest first; ``id`` breaks ties between equal timestamps."""
        result = await self.session.execute(
            select(ParentOrderRecord)
            .where(ParentOrderRecord.customer_id == customer_id)
            .order_by(ParentOrderRecord.created_at.desc(), ParentOrderRecord.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [to_domain(record) for record in result.scalars()]

    @log_operation()
    async def find_all(self, limit: int, offset: int = 0) -> list[ParentOrder]:
        result = await self.session.execute(
            select(ParentOrderRecord)
            .order_by(ParentOrderRecord.created_at.desc(), ParentOrderRecord.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [to_domain(record) for record in result.scalars()]

    @log_operation()
    async def count_by_customer_id(self, customer_id: int) -> int:
        result = await self.session.execute(
            select(func.count(ParentOrderRecord.id)).where(ParentOrderRecord.customer_id == customer_id)
        )
        return result.scalar_one()

    @log_operation()
    async def count(self) -> int:
        result = await self.session.execute(select(func.count(ParentOrderRecord.id)))
        return result.scalar_one()

    @log_operation()
    async def count_by_status(self) -> dict[ParentOrderStatus, int]:
        """Order counts per status; statuses with no orders map to 0."""
        result = await self.session.execute(
            select(ParentOrderRecord.status, func.count(ParentOrderRecord.id)).group_by(ParentOrderRecord.status)
        )
        counts = {status: 0 for status in ParentOrderStatus}
        for status, count in result.all():
            counts[ParentOrderStatus(status)] = count
        return counts

    @log_operation()
    async def sum_total_amount_by_status(self, status: ParentOrderStatus) -> int:
        result = await self.session.execute(
            select(func.coalesce(func.sum(ParentOrderRecord.total_amount), 0)).where(
                ParentOrderRecord.status == status.value
            )
        )
        return int(result.scalar_one())
