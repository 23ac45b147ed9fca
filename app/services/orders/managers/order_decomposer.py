"""
OrderDecomposer - splits a checkout into per-seller store orders.

Coordinates grouping, numbering, persistence and commission accounting for
one checkout. Everything written for a checkout happens in one unit of work:
either the parent order, every store order, item and commission is
committed, or nothing is.
"""

import logging

from app.core.logging_config import log_order_operation
from app.domain.models import (
    Commission,
    GroupedLine,
    OrderItem,
    OrderRequest,
    OrderSummary,
    ParentOrder,
    Seller,
    StoreOrder,
    StoreOrderGroup,
)
from app.services.orders.interfaces import SellerLookup, UnitOfWorkFactory
from app.services.orders.managers.order_number_allocator import OrderNumberAllocator
from app.services.orders.validators import CartGrouper
from app.utils.error_handler import SellerNotFoundException, SellerNotSellableException

logger = logging.getLogger(__name__)


class OrderDecomposer:
    """
    Creates a parent order and its store orders from a checkout request.

    Dependencies are injected (DIP): the grouper resolves products, the seller
    lookup resolves sellers and the unit-of-work factory opens a transaction.
    """

    def __init__(
        self,
        grouper: CartGrouper,
        seller_lookup: SellerLookup,
        unit_of_work_factory: UnitOfWorkFactory,
        currency: str = "USD",
        order_prefix: str = "ORD",
    ):
        self.grouper = grouper
        self.seller_lookup = seller_lookup
        self.unit_of_work_factory = unit_of_work_factory
        self.currency = currency
        self.order_prefix = order_prefix

    async def create_order(self, request: OrderRequest) -> OrderSummary:
        """
        Create an order for ``request``.

        Flow:
        1. Group cart lines by seller (no writes)
        2. Resolve and check every seller (no writes)
        3. In one transaction: parent shell, then per seller a store order
           shell, its items and commissions, then back-fill totals
        4. Commit and return the summary

        Args:
            request: Customer checkout request

        Returns:
            OrderSummary: Persisted parent order with its store orders

        Raises:
            ValidationException: If the request is malformed
            ProductNotFoundException: If a product does not exist
            ProductUnassignedException: If a product has no seller
            SellerNotFoundException: If a seller does not exist
            SellerNotSellableException: If a seller is not approved
            DatabaseException: If persistence fails
        """
        logger.info(f"Creating order for customer {request.customer_id} with {len(request.items)} lines")

        try:
            groups = await self.grouper.group(request)
            sellers = await self._resolve_sellers(groups)
            summary = await self._persist(request.customer_id, groups, sellers)
        except Exception as e:
            logger.error(f"Failed to create order for customer {request.customer_id}: {e}")
            raise

        parent = summary.parent_order
        logger.info(
            f"Created order {parent.order_number} (id={parent.id}) "
            f"with {summary.total_stores} store orders, total {parent.total}"
        )
        log_order_operation(
            "create_order",
            order_id=parent.id,
            order_number=parent.order_number,
            customer_id=parent.customer_id,
            total_amount=parent.total_amount,
            total_stores=summary.total_stores,
        )
        return summary

    async def _resolve_sellers(self, groups: dict[int, list[GroupedLine]]) -> dict[int, Seller]:
        # Catalog reads happen before the order transaction opens
        sellers: dict[int, Seller] = {}
        for store_id in groups:
            seller = await self.seller_lookup.find_by_id(store_id)
            if seller is None:
                raise SellerNotFoundException(store_id=store_id)

            if not seller.sellable:
                raise SellerNotSellableException(store_id=store_id, store_name=seller.name)

            logger.debug(f"Seller {store_id} ({seller.name}) resolved at rate {seller.commission_rate}%")
            sellers[store_id] = seller
        return sellers

    async def _persist(
        self,
        customer_id: int,
        groups: dict[int, list[GroupedLine]],
        sellers: dict[int, Seller],
    ) -> OrderSummary:
        async with self.unit_of_work_factory() as uow:
            allocator = OrderNumberAllocator(uow, prefix=self.order_prefix)

            parent = ParentOrder(
                customer_id=customer_id,
                order_number=await allocator.next_parent_order_number(),
                currency=self.currency,
            )
            await uow.parent_orders.create(parent)

            store_groups: list[StoreOrderGroup] = []
            parent_total = 0
            for store_id, lines in groups.items():
                group = await self._persist_store_order(uow, allocator, parent, sellers[store_id], lines)
                store_groups.append(group)
                parent_total += group.store_order.total_amount

            parent.total_amount = parent_total
            await uow.parent_orders.update(parent)

            await uow.commit()

        return OrderSummary(parent_order=parent, store_orders=store_groups)

    async def _persist_store_order(
        self,
        uow,
        allocator: OrderNumberAllocator,
        parent: ParentOrder,
        seller: Seller,
        lines: list[GroupedLine],
    ) -> StoreOrderGroup:
        store_order = StoreOrder(
            parent_order_id=parent.id,
            customer_id=parent.customer_id,
            store_id=seller.id,
            order_number=await allocator.next_store_order_number(parent.id, seller.id),
            currency=parent.currency,
        )
        await uow.store_orders.create(store_order)

        items: list[OrderItem] = []
        subtotal = 0
        for line in lines:
            item = OrderItem.create(
                store_order_id=store_order.id,
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=line.product.price_cents,
            )
            await uow.order_items.create(item)
            items.append(item)
            subtotal += item.total_price

        commissions = []
        for item in items:
            commission = Commission.for_order_item(item, seller)
            await uow.commissions.create(commission)
            commissions.append(commission)

        store_order.total_amount = subtotal
        await uow.store_orders.update(store_order)

        logger.debug(
            f"Store order {store_order.order_number} for seller {seller.id}: "
            f"{len(items)} items, subtotal {store_order.total}"
        )
        return StoreOrderGroup(store_order=store_order, items=items, seller=seller, commissions=commissions)
