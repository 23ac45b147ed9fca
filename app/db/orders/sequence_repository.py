"""
Repository for order number counters.

Each scope has one row in ``order_number_sequences``. Incrementing it with a
single UPDATE ... RETURNING is atomic in the database, so concurrent
transactions never observe the same value for the same scope.
"""

import logging

from sqlalchemy import insert, update
from sqlalchemy.exc import IntegrityError

from app.db.models import OrderNumberSequenceRecord

from .base import BaseRepository, log_operation

logger = logging.getLogger(__name__)


class OrderNumberSequenceRepository(BaseRepository):
    @log_operation()
    async def next_value(self, scope: str) -> int:
        """
        Advance the counter for ``scope`` and return the new value.

        The first call for a scope creates the row with value 1. If another
        transaction creates the row concurrently, the insert loses on the
        primary key and the increment is retried.
        """
        value = await self._increment(scope)
        if value is not None:
            return value

        try:
            async with self.session.begin_nested():
                await self.session.execute(insert(OrderNumberSequenceRecord).values(scope=scope, last_value=1))
            logger.debug(f"Sequence scope created: {scope}")
            return 1
        except IntegrityError:
            logger.debug(f"Sequence scope {scope} created concurrently, retrying increment")

        value = await self._increment(scope)
        if value is None:
            raise RuntimeError(f"Sequence scope {scope} vanished during allocation")
        return value

    async def _increment(self, scope: str) -> int | None:
        result = await self.session.execute(
            update(OrderNumberSequenceRecord)
            .where(OrderNumberSequenceRecord.scope == scope)
            .values(last_value=OrderNumberSequenceRecord.last_value + 1)
            .returning(OrderNumberSequenceRecord.last_value)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()
