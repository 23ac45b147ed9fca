"""
Integration tests for the orders and commissions API.

The application runs in-process over httpx's ASGI transport against a real
SQLite database seeded with a small catalog.
"""

from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from app.db.models import ProductRecord, StoreRecord
from app.main import create_application
from app.services.orders import create_order_services


@pytest_asyncio.fixture
async def seeded_db(conn_db):
    async with conn_db.get_session() as session:
        session.add_all(
            [
                StoreRecord(id=1, name="Acme", commission_rate=Decimal("10.00"), status="approved"),
                StoreRecord(id=2, name="Globex", commission_rate=Decimal("12.50"), status="approved"),
                StoreRecord(id=3, name="Initech", commission_rate=Decimal("10.00"), status="pending"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                ProductRecord(id=101, name="Widget", price_cents=1000, store_id=1),
                ProductRecord(id=201, name="Sprocket", price_cents=333, store_id=2),
                ProductRecord(id=301, name="Stapler", price_cents=700, store_id=3),
                ProductRecord(id=999, name="Loose", price_cents=400, store_id=None),
            ]
        )
        await session.commit()
    return conn_db


@pytest_asyncio.fixture
async def client(seeded_db):
    app = create_application()
    app.state.conn_db = seeded_db
    app.state.order_services = create_order_services(seeded_db)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


async def _checkout(client, *lines: tuple[int, int], customer_id: int = 7) -> httpx.Response:
    return await client.post(
        "/api/v1/orders",
        json={
            "customer_id": customer_id,
            "items": [{"product_id": product_id, "quantity": quantity} for product_id, quantity in lines],
        },
    )


class TestOrdersApi:
    @pytest.mark.asyncio
    async def test_create_order(self, client):
        response = await _checkout(client, (101, 2), (201, 3))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["total_amount"] == "29.99"
        assert data["total_stores"] == 2
        assert data["parent_order"]["order_number"] == "ORD-00000001"
        assert data["parent_order"]["total_amount_cents"] == 2999

        acme, globex = data["store_orders"]
        assert acme["store_order"]["order_number"] == f"ORD-{data['parent_order']['id']}-1-01"
        assert acme["store_order"]["total_amount"] == "20.00"
        assert acme["seller"]["name"] == "Acme"
        assert acme["item_count"] == 2
        assert [c["commission_amount"] for c in acme["commissions"]] == ["2.00"]
        assert globex["store_order"]["total_amount"] == "9.99"
        assert [c["commission_amount_cents"] for c in globex["commissions"]] == [125]

    @pytest.mark.asyncio
    async def test_unknown_product_is_404(self, client):
        response = await _checkout(client, (101, 1), (555, 1))

        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unassigned_product_is_422(self, client):
        response = await _checkout(client, (999, 1))

        assert response.status_code == 422
        assert response.json()["error_code"] == "PRODUCT_UNASSIGNED"

    @pytest.mark.asyncio
    async def test_store_not_approved_is_422(self, client):
        response = await _checkout(client, (301, 1))

        assert response.status_code == 422
        assert response.json()["error_code"] == "SELLER_NOT_SELLABLE"

    @pytest.mark.asyncio
    async def test_malformed_request_is_422(self, client):
        response = await client.post("/api/v1/orders", json={"customer_id": 7, "items": []})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_oversized_quantity_is_422(self, client):
        response = await _checkout(client, (101, 2**62))

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_order_by_id_and_number(self, client):
        created = (await _checkout(client, (101, 1))).json()["data"]["parent_order"]

        by_id = await client.get(f"/api/v1/orders/{created['id']}")
        by_number = await client.get(f"/api/v1/orders/by-number/{created['order_number']}")

        assert by_id.status_code == 200
        assert by_number.json()["data"]["parent_order"]["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_missing_order_is_404(self, client):
        response = await client.get("/api/v1/orders/424242")

        assert response.status_code == 404
        assert response.json()["error_type"] == "http_error"

    @pytest.mark.asyncio
    async def test_customer_and_seller_listings(self, client):
        await _checkout(client, (101, 2), customer_id=5)
        await _checkout(client, (101, 1), (201, 1), customer_id=5)

        customer = (await client.get("/api/v1/orders/customers/5")).json()["data"]
        seller = (await client.get("/api/v1/orders/stores/1")).json()["data"]

        assert customer["total"] == 2
        assert len(customer["orders"]) == 2
        assert [so["item_count"] for so in seller] == [1, 2]

    @pytest.mark.asyncio
    async def test_status_updates(self, client):
        created = (await _checkout(client, (101, 1))).json()["data"]
        order_id = created["parent_order"]["id"]
        store_order_id = created["store_orders"][0]["store_order"]["id"]

        completed = await client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "completed"})
        reopened = await client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "pending"})
        shipped = await client.patch(f"/api/v1/orders/store-orders/{store_order_id}/status", json={"status": "shipped"})
        unknown = await client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "lost"})
        missing = await client.patch("/api/v1/orders/424242/status", json={"status": "completed"})

        assert completed.status_code == 200
        assert completed.json()["data"]["status"] == "completed"
        assert reopened.status_code == 409
        assert shipped.status_code == 409
        assert unknown.status_code == 422
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_stats(self, client):
        first = (await _checkout(client, (101, 1))).json()["data"]["parent_order"]
        await _checkout(client, (201, 1))
        await client.patch(f"/api/v1/orders/{first['id']}/status", json={"status": "completed"})

        stats = (await client.get("/api/v1/orders/stats")).json()["data"]

        assert stats["total_orders"] == 2
        assert stats["completed_orders"] == 1
        assert stats["pending_orders"] == 1
        assert stats["total_revenue"] == "10.00"

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["services"]["database"] is True


class TestCommissionsApi:
    @pytest.mark.asyncio
    async def test_commission_lifecycle(self, client):
        created = (await _checkout(client, (101, 2), (201, 1))).json()["data"]
        acme_commission = created["store_orders"][0]["commissions"][0]
        item_id = created["store_orders"][0]["items"][0]["id"]

        by_item = await client.get(f"/api/v1/commissions/order-items/{item_id}")
        paid = await client.post(f"/api/v1/commissions/{acme_commission['id']}/pay")
        paid_again = await client.post(f"/api/v1/commissions/{acme_commission['id']}/pay")
        totals = (await client.get("/api/v1/commissions/stores/1/totals")).json()["data"]
        listed = (await client.get("/api/v1/commissions/stores/1", params={"status": "paid"})).json()["data"]

        assert by_item.json()["data"]["id"] == acme_commission["id"]
        assert paid.status_code == 200
        assert paid.json()["data"]["paid_at"] is not None
        assert paid_again.status_code == 409
        assert totals["paid_amount"] == "2.00"
        assert totals["commission_count"] == 1
        assert [c["id"] for c in listed] == [acme_commission["id"]]

    @pytest.mark.asyncio
    async def test_unknown_commission_is_404(self, client):
        assert (await client.post("/api/v1/commissions/9999/pay")).status_code == 404
        assert (await client.post("/api/v1/commissions/9999/cancel")).status_code == 404
        assert (await client.get("/api/v1/commissions/order-items/9999")).status_code == 404
