"""
Endpoints de órdenes multi-vendedor.

Checkout, consultas, cambios de estado y estadísticas. Las búsquedas que no
encuentran la orden responden 404; los errores de dominio se traducen en los
manejadores de excepciones globales.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.v1.dependencies import get_order_services
from app.api.v1.schemas.order_schemas import (
    CreateOrderRequest,
    OrderStatsResponse,
    OrderSummaryResponse,
    ParentOrderResponse,
    SellerOrderResponse,
    StoreOrderResponse,
    UpdateStatusRequest,
)
from app.core.config import get_settings
from app.domain.models import OrderLineRequest, OrderRequest
from app.services.orders import OrderServices

logger = logging.getLogger(__name__)
settings = get_settings()

# Crear router
router = APIRouter()


def _not_found(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: CreateOrderRequest,
    services: OrderServices = Depends(get_order_services),
) -> dict[str, Any]:
    """
    Crea una orden y la divide en órdenes por vendedor.

    Example Request:
        ```json
        {"customer_id": 7, "items": [{"product_id": 1, "quantity": 2}]}
        ```
    """
    request = OrderRequest(
        customer_id=payload.customer_id,
        items=[OrderLineRequest(product_id=line.product_id, quantity=line.quantity) for line in payload.items],
    )
    summary = await services.decomposer.create_order(request)

    return {
        "status": "success",
        "data": OrderSummaryResponse.from_domain(summary).model_dump(mode="json"),
        "message": f"Order {summary.parent_order.order_number} created",
    }


@router.get("/stats", status_code=status.HTTP_200_OK)
async def get_order_stats(services: OrderServices = Depends(get_order_services)) -> dict[str, Any]:
    """Estadísticas agregadas de órdenes padre."""
    stats = await services.queries.get_order_stats()
    return {
        "status": "success",
        "data": OrderStatsResponse.from_domain(stats, settings.DEFAULT_CURRENCY).model_dump(mode="json"),
        "message": "Order statistics retrieved successfully",
    }


@router.get("", status_code=status.HTTP_200_OK)
async def list_orders(
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    services: OrderServices = Depends(get_order_services),
) -> dict[str, Any]:
    orders = await services.queries.find_all_orders(limit=limit, offset=offset)
    return {
        "status": "success",
        "data": [ParentOrderResponse.from_domain(order).model_dump(mode="json") for order in orders],
        "message": f"{len(orders)} orders retrieved",
    }


@router.get("/by-number/{order_number}", status_code=status.HTTP_200_OK)
async def get_order_by_number(
    order_number: str, services: OrderServices = Depends(get_order_services)
) -> dict[str, Any]:
    summary = await services.queries.find_order_by_number(order_number)
    if summary is None:
        raise _not_found(f"Order {order_number} not found")

    return {
        "status": "success",
        "data": OrderSummaryResponse.from_domain(summary).model_dump(mode="json"),
        "message": "Order retrieved successfully",
    }


@router.get("/customers/{customer_id}", status_code=status.HTTP_200_OK)
async def list_customer_orders(
    customer_id: int,
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    services: OrderServices = Depends(get_order_services),
) -> dict[str, Any]:
    """Órdenes de un cliente, más recientes primero, con el total para paginar."""
    orders = await services.queries.find_orders_by_customer(customer_id, limit=limit, offset=offset)
    total = await services.queries.count_orders_by_customer(customer_id)
    return {
        "status": "success",
        "data": {
            "orders": [ParentOrderResponse.from_domain(order).model_dump(mode="json") for order in orders],
            "total": total,
        },
        "message": f"{len(orders)} orders retrieved",
    }


@router.get("/stores/{store_id}", status_code=status.HTTP_200_OK)
async def list_seller_orders(
    store_id: int,
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    services: OrderServices = Depends(get_order_services),
) -> dict[str, Any]:
    store_orders = await services.queries.find_seller_orders(store_id, limit=limit, offset=offset)
    return {
        "status": "success",
        "data": [SellerOrderResponse.from_domain(summary).model_dump(mode="json") for summary in store_orders],
        "message": f"{len(store_orders)} store orders retrieved",
    }


@router.patch("/store-orders/{store_order_id}/status", status_code=status.HTTP_200_OK)
async def update_store_order_status(
    store_order_id: int,
    payload: UpdateStatusRequest,
    services: OrderServices = Depends(get_order_services),
) -> dict[str, Any]:
    store_order = await services.queries.update_store_order_status(store_order_id, payload.status)
    if store_order is None:
        raise _not_found(f"Store order {store_order_id} not found")

    return {
        "status": "success",
        "data": StoreOrderResponse.from_domain(store_order).model_dump(mode="json"),
        "message": f"Store order moved to {store_order.status.value}",
    }


@router.get("/{order_id}", status_code=status.HTTP_200_OK)
async def get_order(order_id: int, services: OrderServices = Depends(get_order_services)) -> dict[str, Any]:
    summary = await services.queries.find_order_by_id(order_id)
    if summary is None:
        raise _not_found(f"Order {order_id} not found")

    return {
        "status": "success",
        "data": OrderSummaryResponse.from_domain(summary).model_dump(mode="json"),
        "message": "Order retrieved successfully",
    }


@router.patch("/{order_id}/status", status_code=status.HTTP_200_OK)
async def update_order_status(
    order_id: int,
    payload: UpdateStatusRequest,
    services: OrderServices = Depends(get_order_services),
) -> dict[str, Any]:
    order = await services.queries.update_parent_order_status(order_id, payload.status)
    if order is None:
        raise _not_found(f"Order {order_id} not found")

    return {
        "status": "success",
        "data": ParentOrderResponse.from_domain(order).model_dump(mode="json"),
        "message": f"Order moved to {order.status.value}",
    }
