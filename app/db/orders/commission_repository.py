"""
Repository for the commission ledger.
"""

from typing import Optional

from sqlalchemy import case, func, select

from app.db.models import CommissionRecord
from app.domain.models import Commission
from app.domain.value_objects import CommissionStatus

from .base import BaseRepository, log_operation


def to_domain(record: CommissionRecord) -> Commission:
    return Commission(
        id=record.id,
        order_item_id=record.order_item_id,
        store_id=record.store_id,
        commission_rate=record.commission_rate,
        commission_amount=record.commission_amount,
        status=CommissionStatus(record.status),
        paid_at=record.paid_at,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class CommissionRepository(BaseRepository):
    @log_operation()
    async def create(self, commission: Commission) -> Commission:
        record = CommissionRecord(
            order_item_id=commission.order_item_id,
            store_id=commission.store_id,
            commission_rate=commission.commission_rate,
            commission_amount=commission.commission_amount,
            status=commission.status.value,
            paid_at=commission.paid_at,
            created_at=commission.created_at,
            updated_at=commission.updated_at,
        )
        self.session.add(record)
        await self.session.flush()

        commission.id = record.id
        return commission

    @log_operation()
    async def update(self, commission: Commission) -> Commission:
        record = await self.session.get(CommissionRecord, commission.id)
        if record is None:
            raise ValueError(f"Commission {commission.id} does not exist")

        record.status = commission.status.value
        record.paid_at = commission.paid_at
        record.updated_at = commission.updated_at
        await self.session.flush()
        return commission

    @log_operation()
    async def find_by_id(self, commission_id: int) -> Optional[Commission]:
        record = await self.session.get(CommissionRecord, commission_id)
        return to_domain(record) if record else None

    @log_operation()
    async def find_by_order_item_id(self, order_item_id: int) -> Optional[Commission]:
        result = await self.session.execute(
            select(CommissionRecord).where(CommissionRecord.order_item_id == order_item_id)
        )
        record = result.scalar_one_or_none()
        return to_domain(record) if record else None

    @log_operation()
    async def find_by_order_item_ids(self, order_item_ids: list[int]) -> list[Commission]:
        if not order_item_ids:
            return []

        result = await self.session.execute(
            select(CommissionRecord)
            .where(CommissionRecord.order_item_id.in_(order_item_ids))
            .order_by(CommissionRecord.id.asc())
        )
        return [to_domain(record) for record in result.scalars()]

    @log_operation()
    async def find_by_store_id(
        self,
        store_id: int,
        limit: int,
        offset: int = 0,
        status: Optional[CommissionStatus] = None,
    ) -> list[Commission]:
        """A store's commissions, newest first, optionally filtered by status."""
        query = select(CommissionRecord).where(CommissionRecord.store_id == store_id)
        if status is not None:
            query = query.where(CommissionRecord.status == status.value)

        result = await self.session.execute(
            query.order_by(CommissionRecord.created_at.desc(), CommissionRecord.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [to_domain(record) for record in result.scalars()]

    @log_operation()
    async def totals_by_store_id(self, store_id: int) -> dict[str, int]:
        """
        Aggregate a store's commissions in one query.

        Returns:
            dict with ``total`` (non-cancelled), ``pending``, ``paid`` amounts
            and ``count`` of non-cancelled commissions
        """

        def amount_when(*statuses: CommissionStatus):
            return func.coalesce(
                func.sum(
                    case(
                        (CommissionRecord.status.in_([s.value for s in statuses]), CommissionRecord.commission_amount),
                        else_=0,
                    )
                ),
                0,
            )

        active = (CommissionStatus.PENDING, CommissionStatus.PAID)
        result = await self.session.execute(
            select(
                amount_when(*active),
                amount_when(CommissionStatus.PENDING),
                amount_when(CommissionStatus.PAID),
                func.count(case((CommissionRecord.status.in_([s.value for s in active]), CommissionRecord.id))),
            ).where(CommissionRecord.store_id == store_id)
        )
        total, pending, paid, count = result.one()
        return {"total": int(total), "pending": int(pending), "paid": int(paid), "count": int(count)}
