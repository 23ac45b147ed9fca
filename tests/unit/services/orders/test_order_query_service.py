"""Tests para OrderQueryService: consultas, listados, estados y estadísticas."""

import pytest

from app.domain.models import OrderLineRequest, OrderRequest
from app.domain.value_objects import ParentOrderStatus, StoreOrderStatus
from app.utils.error_handler import InvalidStatusTransitionException, ValidationException


def _request(*lines: tuple[int, int], customer_id: int = 7) -> OrderRequest:
    return OrderRequest(
        customer_id=customer_id,
        items=[OrderLineRequest(product_id=product_id, quantity=quantity) for product_id, quantity in lines],
    )


class TestFindOrders:
    @pytest.mark.asyncio
    async def test_find_missing_order_returns_none(self, services):
        """Una orden inexistente devuelve None, nunca una excepción."""
        assert await services.queries.find_order_by_id(12345) is None
        assert await services.queries.find_order_by_number("ORD-99999999") is None

    @pytest.mark.asyncio
    async def test_find_by_id_and_number_return_full_summary(self, services):
        created = await services.decomposer.create_order(_request((101, 2), (201, 1)))

        by_id = await services.queries.find_order_by_id(created.parent_order.id)
        by_number = await services.queries.find_order_by_number(created.parent_order.order_number)

        for summary in (by_id, by_number):
            assert summary.parent_order.id == created.parent_order.id
            assert summary.total_amount == created.total_amount
            assert summary.total_stores == 2
            assert [g.store_order.store_id for g in summary.store_orders] == [1, 2]
            assert [g.seller.name for g in summary.store_orders] == ["Acme", "Globex"]
            assert [len(g.commissions) for g in summary.store_orders] == [1, 1]

    @pytest.mark.asyncio
    async def test_summary_keeps_store_orders_of_removed_sellers(self, services, seller_lookup):
        created = await services.decomposer.create_order(_request((101, 1), (201, 1)))
        del seller_lookup.sellers[2]

        summary = await services.queries.find_order_by_id(created.parent_order.id)

        assert summary.total_stores == 2
        assert summary.store_orders[1].seller is None

    @pytest.mark.asyncio
    async def test_customer_orders_newest_first_with_pagination(self, services):
        created = [await services.decomposer.create_order(_request((101, 1), customer_id=5)) for _ in range(3)]
        await services.decomposer.create_order(_request((101, 1), customer_id=6))

        page = await services.queries.find_orders_by_customer(5, limit=2, offset=0)
        rest = await services.queries.find_orders_by_customer(5, limit=2, offset=2)

        expected = [c.parent_order.id for c in reversed(created)]
        assert [o.id for o in page] == expected[:2]
        assert [o.id for o in rest] == expected[2:]
        assert await services.queries.count_orders_by_customer(5) == 3
        assert await services.queries.count_orders_by_customer(999) == 0

    @pytest.mark.asyncio
    async def test_find_all_orders(self, services):
        for customer_id in (1, 2, 3):
            await services.decomposer.create_order(_request((101, 1), customer_id=customer_id))

        orders = await services.queries.find_all_orders()

        assert [o.customer_id for o in orders] == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_negative_offset_rejected(self, services):
        with pytest.raises(ValidationException):
            await services.queries.find_all_orders(offset=-1)

    @pytest.mark.asyncio
    async def test_limit_is_capped(self, services):
        services.queries.max_page_size = 2
        for _ in range(3):
            await services.decomposer.create_order(_request((101, 1)))

        assert len(await services.queries.find_all_orders(limit=500)) == 2


class TestSellerOrders:
    @pytest.mark.asyncio
    async def test_item_count_is_sum_of_quantities(self, services):
        """item_count suma cantidades, no líneas."""
        await services.decomposer.create_order(_request((101, 2), (102, 3), (201, 1)))
        await services.decomposer.create_order(_request((202, 4)))

        acme_orders = await services.queries.find_seller_orders(1)
        globex_orders = await services.queries.find_seller_orders(2)

        assert len(acme_orders) == 1
        assert acme_orders[0].item_count == 5
        assert acme_orders[0].total_amount == 2 * 1000 + 3 * 500
        assert acme_orders[0].seller.name == "Acme"
        assert [o.item_count for o in globex_orders] == [4, 1]

    @pytest.mark.asyncio
    async def test_unknown_seller_has_no_orders(self, services):
        assert await services.queries.find_seller_orders(77) == []


class TestStatusUpdates:
    @pytest.mark.asyncio
    async def test_update_parent_order_status_persists(self, services):
        created = await services.decomposer.create_order(_request((101, 1)))

        updated = await services.queries.update_parent_order_status(created.parent_order.id, "processing")
        reloaded = await services.queries.find_order_by_id(created.parent_order.id)

        assert updated.status is ParentOrderStatus.PROCESSING
        assert reloaded.parent_order.status is ParentOrderStatus.PROCESSING

    @pytest.mark.asyncio
    async def test_update_missing_order_returns_none(self, services):
        assert await services.queries.update_parent_order_status(4242, "completed") is None
        assert await services.queries.update_store_order_status(4242, "processing") is None

    @pytest.mark.asyncio
    async def test_illegal_transition_is_rejected_and_not_persisted(self, services):
        created = await services.decomposer.create_order(_request((101, 1)))
        order_id = created.parent_order.id
        await services.queries.update_parent_order_status(order_id, "completed")

        with pytest.raises(InvalidStatusTransitionException):
            await services.queries.update_parent_order_status(order_id, "pending")

        reloaded = await services.queries.find_order_by_id(order_id)
        assert reloaded.parent_order.status is ParentOrderStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_unknown_status_is_rejected(self, services):
        created = await services.decomposer.create_order(_request((101, 1)))

        with pytest.raises(ValidationException):
            await services.queries.update_parent_order_status(created.parent_order.id, "lost")

    @pytest.mark.asyncio
    async def test_store_order_fulfillment(self, services):
        created = await services.decomposer.create_order(_request((101, 1), (201, 1)))
        store_order_id = created.store_orders[0].store_order.id

        for status in ("processing", "shipped", "delivered"):
            updated = await services.queries.update_store_order_status(store_order_id, status)

        assert updated.status is StoreOrderStatus.DELIVERED
        reloaded = await services.queries.find_order_by_id(created.parent_order.id)
        assert reloaded.store_orders[0].store_order.status is StoreOrderStatus.DELIVERED
        assert reloaded.store_orders[1].store_order.status is StoreOrderStatus.PENDING


class TestOrderStats:
    @pytest.mark.asyncio
    async def test_empty_database(self, services):
        stats = await services.queries.get_order_stats()

        assert stats.total_orders == 0
        assert stats.total_revenue == 0

    @pytest.mark.asyncio
    async def test_counts_and_revenue_from_completed_orders_only(self, services):
        """3 pendientes, 2 completadas y 1 cancelada; ingresos solo de las completadas."""
        carts = [(101, 1), (102, 1), (201, 1), (202, 1), (101, 3), (102, 2)]
        created = [await services.decomposer.create_order(_request(line)) for line in carts]

        completed = created[3:5]
        for summary in completed:
            await services.queries.update_parent_order_status(summary.parent_order.id, "completed")
        await services.queries.update_parent_order_status(created[5].parent_order.id, "cancelled")

        stats = await services.queries.get_order_stats()

        assert stats.total_orders == 6
        assert stats.pending_orders == 3
        assert stats.completed_orders == 2
        assert stats.cancelled_orders == 1
        assert stats.processing_orders == 0
        assert stats.total_revenue == sum(s.total_amount for s in completed) == 2000 + 3000
