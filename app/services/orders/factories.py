"""
Factory for wiring order services (DIP).

Dependency creation lives here so the API layer and tests get fully
configured services from one call.
"""

from dataclasses import dataclass
from functools import partial
from typing import Optional

from app.core.config import get_settings
from app.db.catalog import SqlProductLookup, SqlSellerLookup
from app.db.connection import ConnDB
from app.db.unit_of_work import SqlAlchemyUnitOfWork
from app.services.orders.interfaces import ProductLookup, SellerLookup
from app.services.orders.managers import OrderDecomposer
from app.services.orders.queries import CommissionLedgerService, OrderQueryService
from app.services.orders.validators import CartGrouper


@dataclass
class OrderServices:
    """Write and read services sharing one database connection."""

    decomposer: OrderDecomposer
    queries: OrderQueryService
    commissions: CommissionLedgerService


def create_order_services(
    conn_db: ConnDB,
    product_lookup: Optional[ProductLookup] = None,
    seller_lookup: Optional[SellerLookup] = None,
) -> OrderServices:
    """
    Build the order services over an initialized ConnDB.

    Args:
        conn_db: Initialized connection manager
        product_lookup: Catalog product source; defaults to the ``products`` table
        seller_lookup: Catalog seller source; defaults to the ``stores`` table

    Returns:
        OrderServices: Configured decomposer, query service and commission ledger
    """
    settings = get_settings()
    product_lookup = product_lookup or SqlProductLookup(conn_db)
    seller_lookup = seller_lookup or SqlSellerLookup(conn_db)
    unit_of_work_factory = partial(SqlAlchemyUnitOfWork, conn_db.session_factory)

    decomposer = OrderDecomposer(
        grouper=CartGrouper(product_lookup),
        seller_lookup=seller_lookup,
        unit_of_work_factory=unit_of_work_factory,
        currency=settings.DEFAULT_CURRENCY,
        order_prefix=settings.PARENT_ORDER_PREFIX,
    )
    queries = OrderQueryService(
        unit_of_work_factory=unit_of_work_factory,
        seller_lookup=seller_lookup,
        default_page_size=settings.DEFAULT_PAGE_SIZE,
        max_page_size=settings.MAX_PAGE_SIZE,
    )
    commissions = CommissionLedgerService(
        unit_of_work_factory=unit_of_work_factory,
        default_page_size=settings.DEFAULT_PAGE_SIZE,
        max_page_size=settings.MAX_PAGE_SIZE,
    )
    return OrderServices(decomposer=decomposer, queries=queries, commissions=commissions)
