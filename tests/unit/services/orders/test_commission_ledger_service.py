"""Tests para CommissionLedgerService."""

import pytest

from app.domain.models import OrderLineRequest, OrderRequest
from app.domain.value_objects import CommissionStatus
from app.utils.error_handler import InvalidStatusTransitionException, ValidationException


async def _create(services, *lines: tuple[int, int]):
    request = OrderRequest(
        customer_id=7,
        items=[OrderLineRequest(product_id=product_id, quantity=quantity) for product_id, quantity in lines],
    )
    return await services.decomposer.create_order(request)


class TestCommissionLedger:
    @pytest.mark.asyncio
    async def test_totals_by_store(self, services):
        """Los totales excluyen comisiones canceladas y separan pendientes de pagadas."""
        summary = await _create(services, (101, 2), (102, 1), (201, 1))
        acme_commissions = summary.store_orders[0].commissions

        await services.commissions.mark_commission_paid(acme_commissions[0].id)

        totals = await services.commissions.get_store_commission_totals(1)
        assert totals.total_amount == 250
        assert totals.paid_amount == 200
        assert totals.pending_amount == 50
        assert totals.commission_count == 2

        await services.commissions.cancel_commission(acme_commissions[1].id)

        totals = await services.commissions.get_store_commission_totals(1)
        assert totals.total_amount == 200
        assert totals.pending_amount == 0
        assert totals.commission_count == 1

    @pytest.mark.asyncio
    async def test_totals_for_store_without_commissions(self, services):
        totals = await services.commissions.get_store_commission_totals(55)

        assert (totals.total_amount, totals.pending_amount, totals.paid_amount, totals.commission_count) == (0, 0, 0, 0)

    @pytest.mark.asyncio
    async def test_find_by_store_filters_by_status(self, services):
        summary = await _create(services, (101, 1), (102, 1))
        paid_id = summary.store_orders[0].commissions[0].id
        await services.commissions.mark_commission_paid(paid_id)

        all_commissions = await services.commissions.find_commissions_by_store(1)
        paid = await services.commissions.find_commissions_by_store(1, status="paid")
        pending = await services.commissions.find_commissions_by_store(1, status=CommissionStatus.PENDING)

        assert len(all_commissions) == 2
        assert [c.id for c in paid] == [paid_id]
        assert paid[0].paid_at is not None
        assert len(pending) == 1

    @pytest.mark.asyncio
    async def test_find_by_store_rejects_unknown_status(self, services):
        with pytest.raises(ValidationException):
            await services.commissions.find_commissions_by_store(1, status="refunded")

    @pytest.mark.asyncio
    async def test_find_by_order_item(self, services):
        summary = await _create(services, (201, 3))
        item = summary.store_orders[0].items[0]

        commission = await services.commissions.find_commission_by_order_item(item.id)

        assert commission.commission_amount == 125
        assert await services.commissions.find_commission_by_order_item(9999) is None

    @pytest.mark.asyncio
    async def test_unknown_commission_returns_none(self, services):
        assert await services.commissions.mark_commission_paid(9999) is None
        assert await services.commissions.cancel_commission(9999) is None

    @pytest.mark.asyncio
    async def test_paid_commission_cannot_be_paid_again(self, services):
        summary = await _create(services, (101, 1))
        commission_id = summary.store_orders[0].commissions[0].id
        await services.commissions.mark_commission_paid(commission_id)

        with pytest.raises(InvalidStatusTransitionException):
            await services.commissions.mark_commission_paid(commission_id)
