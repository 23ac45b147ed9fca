"""
SQLAlchemy unit of work.

One unit of work is one database transaction. Every repository it exposes
shares the same session, so either everything written inside the ``async
with`` block is committed or nothing is.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.orders import (
    CommissionRepository,
    OrderItemRepository,
    OrderNumberSequenceRepository,
    ParentOrderRepository,
    StoreOrderRepository,
)

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """
    Transaction scope for order persistence.

    Usage::

        async with SqlAlchemyUnitOfWork(session_factory) as uow:
            await uow.parent_orders.create(order)
            await uow.commit()

    Leaving the block without ``commit()``, or with an exception, rolls the
    transaction back.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self.session: Optional[AsyncSession] = None
        self._committed = False

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._session_factory()
        self._committed = False

        self.parent_orders = ParentOrderRepository(self.session)
        self.store_orders = StoreOrderRepository(self.session)
        self.order_items = OrderItemRepository(self.session)
        self.commissions = CommissionRepository(self.session)
        self.sequences = OrderNumberSequenceRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is not None or not self._committed:
                await self.rollback()
        finally:
            await self.session.close()
            self.session = None

    async def commit(self) -> None:
        await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        await self.session.rollback()
        logger.debug("Unit of work rolled back")
