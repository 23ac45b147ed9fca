"""
CommissionLedgerService - seller-facing view of the commission ledger.
"""

import logging
from typing import Optional

from app.core.logging_config import log_order_operation
from app.domain.models import Commission, CommissionTotals
from app.domain.value_objects import CommissionStatus
from app.services.orders.interfaces import UnitOfWorkFactory

from .pagination import resolve_page

logger = logging.getLogger(__name__)


class CommissionLedgerService:
    """Listings, totals and settlement of marketplace commissions."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory, default_page_size: int = 50, max_page_size: int = 200):
        self.unit_of_work_factory = unit_of_work_factory
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def find_commissions_by_store(
        self,
        store_id: int,
        status: str | CommissionStatus | None = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Commission]:
        limit, offset = resolve_page(limit, offset, self.default_page_size, self.max_page_size)
        status_filter = CommissionStatus.parse(status) if status is not None else None

        async with self.unit_of_work_factory() as uow:
            return await uow.commissions.find_by_store_id(store_id, limit=limit, offset=offset, status=status_filter)

    async def find_commission_by_order_item(self, order_item_id: int) -> Optional[Commission]:
        async with self.unit_of_work_factory() as uow:
            return await uow.commissions.find_by_order_item_id(order_item_id)

    async def get_store_commission_totals(self, store_id: int) -> CommissionTotals:
        """Totals for one store; cancelled commissions are excluded from ``total_amount``."""
        async with self.unit_of_work_factory() as uow:
            totals = await uow.commissions.totals_by_store_id(store_id)

        return CommissionTotals(
            store_id=store_id,
            total_amount=totals["total"],
            pending_amount=totals["pending"],
            paid_amount=totals["paid"],
            commission_count=totals["count"],
        )

    async def mark_commission_paid(self, commission_id: int) -> Optional[Commission]:
        """
        Settle a pending commission.

        Returns:
            The paid commission, or None if it does not exist

        Raises:
            InvalidStatusTransitionException: If the commission is not pending
        """
        return await self._transition(commission_id, CommissionStatus.PAID)

    async def cancel_commission(self, commission_id: int) -> Optional[Commission]:
        return await self._transition(commission_id, CommissionStatus.CANCELLED)

    async def _transition(self, commission_id: int, target: CommissionStatus) -> Optional[Commission]:
        async with self.unit_of_work_factory() as uow:
            commission = await uow.commissions.find_by_id(commission_id)
            if commission is None:
                return None

            if target is CommissionStatus.PAID:
                commission.mark_as_paid()
            else:
                commission.mark_as_cancelled()

            await uow.commissions.update(commission)
            await uow.commit()

        logger.info(f"Commission {commission_id} for store {commission.store_id} marked {target.value}")
        log_order_operation(
            "commission_status",
            commission_id=commission_id,
            store_id=commission.store_id,
            status=target.value,
            amount=commission.commission_amount,
        )
        return commission
