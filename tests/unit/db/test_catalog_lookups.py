"""Tests para las consultas de catálogo sobre SQLite."""

from decimal import Decimal

import pytest

from app.db.catalog import SqlProductLookup, SqlSellerLookup
from app.db.models import ProductRecord, StoreRecord


class TestCatalogLookups:
    @pytest.mark.asyncio
    async def test_product_and_seller_snapshots(self, conn_db):
        async with conn_db.get_session() as session:
            session.add(StoreRecord(id=1, name="Acme", commission_rate=Decimal("7.50"), status="approved"))
            await session.flush()
            session.add(ProductRecord(id=10, name="Widget", price_cents=1250, store_id=1))
            await session.commit()

        product = await SqlProductLookup(conn_db).find_by_id(10)
        seller = await SqlSellerLookup(conn_db).find_by_id(1)

        assert product.price_cents == 1250
        assert product.store_id == 1
        assert product.is_assigned
        assert seller.commission_rate == Decimal("7.50")
        assert seller.sellable

    @pytest.mark.asyncio
    async def test_missing_rows_return_none(self, conn_db):
        assert await SqlProductLookup(conn_db).find_by_id(1) is None
        assert await SqlSellerLookup(conn_db).find_by_id(1) is None
