"""
OrderQueryService - read and reporting side of order management.

Read paths return None for missing orders instead of raising. Status updates
go through the status state machines and raise on illegal transitions.
"""

import logging
from typing import Optional

from app.core.logging_config import log_order_operation
from app.domain.models import (
    OrderStats,
    OrderSummary,
    ParentOrder,
    Seller,
    StoreOrder,
    StoreOrderGroup,
    StoreOrderSummary,
)
from app.domain.value_objects import ParentOrderStatus, StoreOrderStatus
from app.services.orders.interfaces import SellerLookup, UnitOfWorkFactory

from .pagination import resolve_page

logger = logging.getLogger(__name__)


class OrderQueryService:
    """Queries, listings, status updates and statistics over persisted orders."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        seller_lookup: SellerLookup,
        default_page_size: int = 50,
        max_page_size: int = 200,
    ):
        self.unit_of_work_factory = unit_of_work_factory
        self.seller_lookup = seller_lookup
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def find_order_by_id(self, order_id: int) -> Optional[OrderSummary]:
        """Full order summary, or None if the order does not exist."""
        async with self.unit_of_work_factory() as uow:
            parent = await uow.parent_orders.find_by_id(order_id)
            if parent is None:
                return None
            groups = await self._load_store_groups(uow, parent)

        await self._attach_sellers(groups)
        return OrderSummary(parent_order=parent, store_orders=groups)

    async def find_order_by_number(self, order_number: str) -> Optional[OrderSummary]:
        async with self.unit_of_work_factory() as uow:
            parent = await uow.parent_orders.find_by_order_number(order_number)
            if parent is None:
                return None
            groups = await self._load_store_groups(uow, parent)

        await self._attach_sellers(groups)
        return OrderSummary(parent_order=parent, store_orders=groups)

    async def find_orders_by_customer(
        self, customer_id: int, limit: Optional[int] = None, offset: int = 0
    ) -> list[ParentOrder]:
        """A customer's parent orders, newest first."""
        limit, offset = resolve_page(limit, offset, self.default_page_size, self.max_page_size)
        async with self.unit_of_work_factory() as uow:
            return await uow.parent_orders.find_by_customer_id(customer_id, limit=limit, offset=offset)

    async def count_orders_by_customer(self, customer_id: int) -> int:
        async with self.unit_of_work_factory() as uow:
            return await uow.parent_orders.count_by_customer_id(customer_id)

    async def find_all_orders(self, limit: Optional[int] = None, offset: int = 0) -> list[ParentOrder]:
        limit, offset = resolve_page(limit, offset, self.default_page_size, self.max_page_size)
        async with self.unit_of_work_factory() as uow:
            return await uow.parent_orders.find_all(limit=limit, offset=offset)

    async def find_seller_orders(
        self, store_id: int, limit: Optional[int] = None, offset: int = 0
    ) -> list[StoreOrderSummary]:
        """
        A seller's store orders, newest first.

        Each summary carries the items and ``item_count``, the sum of item
        quantities.
        """
        limit, offset = resolve_page(limit, offset, self.default_page_size, self.max_page_size)
        async with self.unit_of_work_factory() as uow:
            store_orders = await uow.store_orders.find_by_store_id(store_id, limit=limit, offset=offset)
            items_by_order = await uow.order_items.find_by_store_order_ids([so.id for so in store_orders])

        seller = await self.seller_lookup.find_by_id(store_id)
        return [
            StoreOrderSummary(store_order=store_order, items=items_by_order[store_order.id], seller=seller)
            for store_order in store_orders
        ]

    async def update_store_order_status(
        self, store_order_id: int, status: str | StoreOrderStatus
    ) -> Optional[StoreOrder]:
        """
        Move a store order to ``status``.

        Returns:
            The updated store order, or None if it does not exist

        Raises:
            ValidationException: If the status is unknown
            InvalidStatusTransitionException: If the transition is not allowed
        """
        target = StoreOrderStatus.parse(status)

        async with self.unit_of_work_factory() as uow:
            store_order = await uow.store_orders.find_by_id(store_order_id)
            if store_order is None:
                return None

            previous = store_order.status
            store_order.change_status(target)
            await uow.store_orders.update(store_order)
            await uow.commit()

        logger.info(f"Store order {store_order.order_number} status {previous.value} -> {target.value}")
        log_order_operation(
            "update_store_order_status",
            store_order_id=store_order.id,
            previous_status=previous.value,
            status=target.value,
        )
        return store_order

    async def update_parent_order_status(
        self, order_id: int, status: str | ParentOrderStatus
    ) -> Optional[ParentOrder]:
        """
        Move a parent order to ``status``.

        Returns:
            The updated parent order, or None if it does not exist

        Raises:
            ValidationException: If the status is unknown
            InvalidStatusTransitionException: If the transition is not allowed
        """
        target = ParentOrderStatus.parse(status)

        async with self.unit_of_work_factory() as uow:
            parent = await uow.parent_orders.find_by_id(order_id)
            if parent is None:
                return None

            previous = parent.status
            parent.change_status(target)
            await uow.parent_orders.update(parent)
            await uow.commit()

        logger.info(f"Order {parent.order_number} status {previous.value} -> {target.value}")
        log_order_operation(
            "update_parent_order_status",
            order_id=parent.id,
            previous_status=previous.value,
            status=target.value,
        )
        return parent

    async def get_order_stats(self) -> OrderStats:
        """
        Aggregate statistics computed in the database.

        Revenue is the sum of totals of completed parent orders only.
        """
        async with self.unit_of_work_factory() as uow:
            total_orders = await uow.parent_orders.count()
            by_status = await uow.parent_orders.count_by_status()
            revenue = await uow.parent_orders.sum_total_amount_by_status(ParentOrderStatus.COMPLETED)

        return OrderStats(
            total_orders=total_orders,
            total_revenue=revenue,
            pending_orders=by_status[ParentOrderStatus.PENDING],
            processing_orders=by_status[ParentOrderStatus.PROCESSING],
            completed_orders=by_status[ParentOrderStatus.COMPLETED],
            cancelled_orders=by_status[ParentOrderStatus.CANCELLED],
        )

    async def _load_store_groups(self, uow, parent: ParentOrder) -> list[StoreOrderGroup]:
        store_orders = await uow.store_orders.find_by_parent_order_id(parent.id)
        items_by_order = await uow.order_items.find_by_store_order_ids([so.id for so in store_orders])

        item_ids = [item.id for items in items_by_order.values() for item in items]
        commissions = await uow.commissions.find_by_order_item_ids(item_ids)
        commission_by_item = {commission.order_item_id: commission for commission in commissions}

        groups = []
        for store_order in store_orders:
            items = items_by_order[store_order.id]
            groups.append(
                StoreOrderGroup(
                    store_order=store_order,
                    items=items,
                    commissions=[commission_by_item[item.id] for item in items if item.id in commission_by_item],
                )
            )
        return groups

    async def _attach_sellers(self, groups: list[StoreOrderGroup]) -> None:
        # A store removed from the catalog keeps its orders; seller stays None
        cache: dict[int, Optional[Seller]] = {}
        for group in groups:
            store_id = group.store_order.store_id
            if store_id not in cache:
                cache[store_id] = await self.seller_lookup.find_by_id(store_id)
                if cache[store_id] is None:
                    logger.warning(f"Store {store_id} of order {group.store_order.order_number} not found in catalog")
            group.seller = cache[store_id]
