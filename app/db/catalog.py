"""
SQL-backed catalog lookups.

Products and stores are read in their own short sessions, outside any order
transaction.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from app.db.connection import ConnDB
from app.db.models import ProductRecord, StoreRecord
from app.domain.models import ProductSnapshot, Seller
from app.utils.error_handler import DatabaseException

logger = logging.getLogger(__name__)


class SqlProductLookup:
    """Reads product snapshots from the ``products`` table."""

    def __init__(self, conn_db: ConnDB):
        self.conn_db = conn_db

    async def find_by_id(self, product_id: int) -> Optional[ProductSnapshot]:
        try:
            async with self.conn_db.get_session() as session:
                record = await session.get(ProductRecord, product_id)
        except SQLAlchemyError as e:
            raise DatabaseException(
                message=f"Failed to load product {product_id}: {str(e)}", operation="find_product"
            ) from e

        if record is None:
            return None

        return ProductSnapshot(
            id=record.id,
            store_id=record.store_id,
            price_cents=record.price_cents,
            name=record.name,
        )


class SqlSellerLookup:
    """Reads sellers from the ``stores`` table."""

    def __init__(self, conn_db: ConnDB):
        self.conn_db = conn_db

    async def find_by_id(self, store_id: int) -> Optional[Seller]:
        try:
            async with self.conn_db.get_session() as session:
                record = await session.get(StoreRecord, store_id)
        except SQLAlchemyError as e:
            raise DatabaseException(
                message=f"Failed to load store {store_id}: {str(e)}", operation="find_seller"
            ) from e

        if record is None:
            return None

        return Seller(
            id=record.id,
            name=record.name,
            commission_rate=record.commission_rate,
            status=record.status,
        )
