"""
Endpoints del libro de comisiones por vendedor.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.v1.dependencies import get_order_services
from app.api.v1.schemas.order_schemas import CommissionResponse, CommissionTotalsResponse
from app.core.config import get_settings
from app.services.orders import OrderServices

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter()


@router.get("/stores/{store_id}", status_code=status.HTTP_200_OK)
async def list_store_commissions(
    store_id: int,
    status_filter: str | None = Query(None, alias="status"),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    services: OrderServices = Depends(get_order_services),
) -> dict[str, Any]:
    commissions = await services.commissions.find_commissions_by_store(
        store_id, status=status_filter, limit=limit, offset=offset
    )
    return {
        "status": "success",
        "data": [
            CommissionResponse.from_domain(c, settings.DEFAULT_CURRENCY).model_dump(mode="json")
            for c in commissions
        ],
        "message": f"{len(commissions)} commissions retrieved",
    }


@router.get("/stores/{store_id}/totals", status_code=status.HTTP_200_OK)
async def get_store_commission_totals(
    store_id: int, services: OrderServices = Depends(get_order_services)
) -> dict[str, Any]:
    totals = await services.commissions.get_store_commission_totals(store_id)
    return {
        "status": "success",
        "data": CommissionTotalsResponse.from_domain(totals, settings.DEFAULT_CURRENCY).model_dump(mode="json"),
        "message": "Commission totals retrieved successfully",
    }


@router.get("/order-items/{order_item_id}", status_code=status.HTTP_200_OK)
async def get_order_item_commission(
    order_item_id: int, services: OrderServices = Depends(get_order_services)
) -> dict[str, Any]:
    commission = await services.commissions.find_commission_by_order_item(order_item_id)
    if commission is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No commission for order item {order_item_id}",
        )

    return {
        "status": "success",
        "data": CommissionResponse.from_domain(commission, settings.DEFAULT_CURRENCY).model_dump(mode="json"),
        "message": "Commission retrieved successfully",
    }


@router.post("/{commission_id}/pay", status_code=status.HTTP_200_OK)
async def pay_commission(commission_id: int, services: OrderServices = Depends(get_order_services)) -> dict[str, Any]:
    commission = await services.commissions.mark_commission_paid(commission_id)
    if commission is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Commission {commission_id} not found")

    return {
        "status": "success",
        "data": CommissionResponse.from_domain(commission, settings.DEFAULT_CURRENCY).model_dump(mode="json"),
        "message": "Commission marked as paid",
    }


@router.post("/{commission_id}/cancel", status_code=status.HTTP_200_OK)
async def cancel_commission(
    commission_id: int, services: OrderServices = Depends(get_order_services)
) -> dict[str, Any]:
    commission = await services.commissions.cancel_commission(commission_id)
    if commission is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Commission {commission_id} not found")

    return {
        "status": "success",
        "data": CommissionResponse.from_domain(commission, settings.DEFAULT_CURRENCY).model_dump(mode="json"),
        "message": "Commission cancelled",
    }
