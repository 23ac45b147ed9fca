"""Tests para OrderDecomposer: división por vendedor, totales, comisiones y atomicidad."""

from datetime import timedelta
from decimal import Decimal

import pytest

from app.db.models import (
    CommissionRecord,
    OrderItemRecord,
    OrderNumberSequenceRecord,
    ParentOrderRecord,
    StoreOrderRecord,
)
from app.db.orders import StoreOrderRepository
from app.domain.models import OrderLineRequest, OrderRequest, Seller
from app.domain.value_objects import CommissionStatus, ParentOrderStatus, StoreOrderStatus, calculate_commission
from app.utils.error_handler import (
    DatabaseException,
    ProductNotFoundException,
    ProductUnassignedException,
    SellerNotFoundException,
    SellerNotSellableException,
)

ORDER_TABLES = (ParentOrderRecord, StoreOrderRecord, OrderItemRecord, CommissionRecord, OrderNumberSequenceRecord)


def _request(*lines: tuple[int, int], customer_id: int = 7) -> OrderRequest:
    return OrderRequest(
        customer_id=customer_id,
        items=[OrderLineRequest(product_id=product_id, quantity=quantity) for product_id, quantity in lines],
    )


async def _assert_nothing_persisted(count_rows) -> None:
    for table in ORDER_TABLES:
        assert await count_rows(table) == 0, table.__tablename__


class TestCreateOrder:
    @pytest.mark.asyncio
    async def test_single_seller_order(self, services):
        """Carrito de un vendedor al 10%: $10x2 + $5x1."""
        summary = await services.decomposer.create_order(_request((101, 2), (102, 1)))

        assert summary.total_stores == 1
        assert summary.total_amount == 2500
        assert summary.parent_order.status is ParentOrderStatus.PENDING
        assert summary.parent_order.order_number == "ORD-00000001"

        group = summary.store_orders[0]
        assert group.store_order.total_amount == 2500
        assert group.store_order.status is StoreOrderStatus.PENDING
        assert group.store_order.order_number == f"ORD-{summary.parent_order.id}-1-01"
        assert group.seller.name == "Acme"
        assert [c.commission_amount for c in group.commissions] == [200, 50]
        assert all(c.status is CommissionStatus.PENDING for c in group.commissions)

    @pytest.mark.asyncio
    async def test_multi_seller_order(self, services):
        """Carrito con dos vendedores: dos órdenes de tienda y total padre igual a la suma."""
        summary = await services.decomposer.create_order(_request((101, 1), (201, 3), (202, 1)))

        assert summary.total_stores == 2
        acme, globex = summary.store_orders
        assert acme.store_order.store_id == 1
        assert globex.store_order.store_id == 2
        assert {item.product_id for item in acme.items} == {101}
        assert {item.product_id for item in globex.items} == {201, 202}

        assert acme.store_order.total_amount == 1000
        assert globex.store_order.total_amount == 999 + 2000
        assert summary.total_amount == acme.store_order.total_amount + globex.store_order.total_amount

        # 12.5% de 999 = 124.875 -> 125; 12.5% de 2000 = 250
        assert [c.commission_amount for c in globex.commissions] == [125, 250]
        assert all(c.commission_rate == Decimal("12.50") for c in globex.commissions)

    @pytest.mark.asyncio
    async def test_persisted_rows_match_invariants(self, services, uow_factory):
        summary = await services.decomposer.create_order(_request((201, 3), (101, 2), (102, 1), (202, 1)))

        async with uow_factory() as uow:
            parent = await uow.parent_orders.find_by_id(summary.parent_order.id)
            store_orders = await uow.store_orders.find_by_parent_order_id(parent.id)

            store_total_sum = 0
            for store_order in store_orders:
                items = await uow.order_items.find_by_store_order_id(store_order.id)
                assert store_order.total_amount == sum(item.total_price for item in items)
                store_total_sum += store_order.total_amount

                for item in items:
                    assert item.total_price == item.unit_price * item.quantity
                    commission = await uow.commissions.find_by_order_item_id(item.id)
                    assert commission.store_id == store_order.store_id
                    assert commission.commission_amount == calculate_commission(
                        item.total_price, commission.commission_rate
                    )

        assert parent.total_amount == store_total_sum == summary.total_amount
        assert [so.store_id for so in store_orders] == [2, 1]

    @pytest.mark.asyncio
    async def test_parent_numbers_increase_across_orders(self, services):
        first = await services.decomposer.create_order(_request((101, 1)))
        second = await services.decomposer.create_order(_request((101, 1)))

        assert first.parent_order.order_number == "ORD-00000001"
        assert second.parent_order.order_number == "ORD-00000002"

    @pytest.mark.asyncio
    async def test_commission_matches_stored_rate_after_reload(self, services, seller_lookup):
        """La comisión guardada debe cuadrar con la tasa guardada aunque el catálogo traiga más decimales."""
        seller_lookup.sellers[1] = Seller(id=1, name="Acme", commission_rate=Decimal("12.345"))

        summary = await services.decomposer.create_order(_request((101, 1)))
        created = summary.store_orders[0].commissions[0]
        loaded = await services.commissions.find_commission_by_order_item(created.order_item_id)

        assert created.commission_rate == loaded.commission_rate == Decimal("12.35")
        assert loaded.commission_amount == created.commission_amount == 124
        assert loaded.commission_amount == calculate_commission(1000, loaded.commission_rate)

    @pytest.mark.asyncio
    async def test_timestamps_stay_utc_after_reload(self, services):
        """Las fechas leídas de la base deben conservar la zona UTC."""
        summary = await services.decomposer.create_order(_request((101, 1)))

        loaded = await services.queries.find_order_by_id(summary.parent_order.id)

        assert loaded.parent_order.created_at.utcoffset() == timedelta(0)
        assert loaded.parent_order.created_at == summary.parent_order.created_at
        assert loaded.store_orders[0].store_order.updated_at.utcoffset() == timedelta(0)
        assert loaded.store_orders[0].items[0].created_at.utcoffset() == timedelta(0)
        assert loaded.store_orders[0].commissions[0].created_at.utcoffset() == timedelta(0)


class TestCreateOrderFailures:
    @pytest.mark.asyncio
    async def test_unassigned_product_persists_nothing(self, services, count_rows):
        with pytest.raises(ProductUnassignedException):
            await services.decomposer.create_order(_request((101, 1), (999, 1)))

        await _assert_nothing_persisted(count_rows)

    @pytest.mark.asyncio
    async def test_missing_product_persists_nothing(self, services, count_rows):
        with pytest.raises(ProductNotFoundException):
            await services.decomposer.create_order(_request((424242, 1)))

        await _assert_nothing_persisted(count_rows)

    @pytest.mark.asyncio
    async def test_unsellable_seller_persists_nothing(self, services, count_rows):
        """Un vendedor no aprobado aborta la orden completa, incluidos los otros vendedores."""
        with pytest.raises(SellerNotSellableException) as exc_info:
            await services.decomposer.create_order(_request((101, 1), (201, 1), (301, 1)))

        assert exc_info.value.store_id == 3
        await _assert_nothing_persisted(count_rows)

    @pytest.mark.asyncio
    async def test_missing_seller_persists_nothing(self, services, count_rows):
        with pytest.raises(SellerNotFoundException) as exc_info:
            await services.decomposer.create_order(_request((101, 1), (401, 1)))

        assert exc_info.value.store_id == 4
        await _assert_nothing_persisted(count_rows)

    @pytest.mark.asyncio
    async def test_failure_mid_transaction_rolls_back_earlier_sellers(self, services, count_rows, monkeypatch):
        """Si falla la segunda orden de tienda, la primera y el padre se revierten."""
        original_create = StoreOrderRepository.create
        calls = {"count": 0}

        async def failing_create(self, store_order):
            calls["count"] += 1
            if calls["count"] == 2:
                raise DatabaseException(message="disk full", operation="StoreOrderRepository.create")
            return await original_create(self, store_order)

        monkeypatch.setattr(StoreOrderRepository, "create", failing_create)

        with pytest.raises(DatabaseException):
            await services.decomposer.create_order(_request((101, 1), (201, 1)))

        assert calls["count"] == 2
        await _assert_nothing_persisted(count_rows)

    @pytest.mark.asyncio
    async def test_failed_order_does_not_consume_parent_number(self, services):
        with pytest.raises(SellerNotSellableException):
            await services.decomposer.create_order(_request((301, 1)))

        summary = await services.decomposer.create_order(_request((101, 1)))

        assert summary.parent_order.order_number == "ORD-00000001"
