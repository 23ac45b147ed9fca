"""Fixtures compartidos: base de datos SQLite temporal y catálogo en memoria."""

from decimal import Decimal
from functools import partial

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from app.db.connection import ConnDB
from app.db.unit_of_work import SqlAlchemyUnitOfWork
from app.domain.models import ProductSnapshot, Seller
from app.services.orders import create_order_services


class InMemoryProductLookup:
    """Catálogo de productos en memoria."""

    def __init__(self, products: list[ProductSnapshot]):
        self.products = {product.id: product for product in products}
        self.calls: list[int] = []

    async def find_by_id(self, product_id: int):
        self.calls.append(product_id)
        return self.products.get(product_id)


class InMemorySellerLookup:
    """Catálogo de vendedores en memoria."""

    def __init__(self, sellers: list[Seller]):
        self.sellers = {seller.id: seller for seller in sellers}

    async def find_by_id(self, store_id: int):
        return self.sellers.get(store_id)


# Tiendas: 1 y 2 aprobadas, 3 pendiente de aprobación, 4 no existe
SELLERS = [
    Seller(id=1, name="Acme", commission_rate=Decimal("10.00"), status="approved"),
    Seller(id=2, name="Globex", commission_rate=Decimal("12.50"), status="approved"),
    Seller(id=3, name="Initech", commission_rate=Decimal("10.00"), status="pending"),
]

PRODUCTS = [
    ProductSnapshot(id=101, store_id=1, price_cents=1000, name="Widget"),
    ProductSnapshot(id=102, store_id=1, price_cents=500, name="Gadget"),
    ProductSnapshot(id=201, store_id=2, price_cents=333, name="Sprocket"),
    ProductSnapshot(id=202, store_id=2, price_cents=2000, name="Flange"),
    ProductSnapshot(id=301, store_id=3, price_cents=700, name="Stapler"),
    ProductSnapshot(id=401, store_id=4, price_cents=900, name="Orphan"),
    ProductSnapshot(id=999, store_id=None, price_cents=400, name="Loose"),
]


@pytest.fixture
def product_lookup():
    return InMemoryProductLookup(PRODUCTS)


@pytest.fixture
def seller_lookup():
    return InMemorySellerLookup(SELLERS)


@pytest_asyncio.fixture
async def conn_db(tmp_path):
    conn = ConnDB(database_url=f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}", echo=False)
    await conn.initialize(create_tables=True)
    yield conn
    await conn.close()


@pytest.fixture
def uow_factory(conn_db):
    return partial(SqlAlchemyUnitOfWork, conn_db.session_factory)


@pytest.fixture
def services(conn_db, product_lookup, seller_lookup):
    return create_order_services(conn_db, product_lookup=product_lookup, seller_lookup=seller_lookup)


@pytest.fixture
def count_rows(conn_db):
    """Cuenta las filas de una tabla ORM en una sesión nueva."""

    async def _count(model) -> int:
        async with conn_db.get_session() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return _count
