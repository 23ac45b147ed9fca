"""
Modelos Pydantic para la API de órdenes.

Los montos viajan como enteros (centavos) dentro del dominio y solo se
convierten a texto decimal ("25.00") en estas respuestas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.models import (
    Commission,
    CommissionTotals,
    OrderItem,
    OrderStats,
    OrderSummary,
    ParentOrder,
    Seller,
    StoreOrder,
    StoreOrderGroup,
    StoreOrderSummary,
)
from app.domain.value_objects import Money
from app.services.orders.validators.cart_grouper import MAX_LINE_QUANTITY


def _display(amount_cents: int, currency: str) -> str:
    return Money(amount_cents=amount_cents, currency=currency).to_display()


# === REQUESTS ===


class CreateOrderItemRequest(BaseModel):
    """Línea del carrito."""

    product_id: int = Field(..., gt=0, description="ID del producto en el catálogo")
    quantity: int = Field(..., gt=0, le=MAX_LINE_QUANTITY, description="Unidades solicitadas")


class CreateOrderRequest(BaseModel):
    """Solicitud de checkout."""

    customer_id: int = Field(..., gt=0, description="ID del cliente")
    items: list[CreateOrderItemRequest] = Field(..., min_length=1, description="Líneas del carrito")


class UpdateStatusRequest(BaseModel):
    """Cambio de estado de una orden."""

    status: str = Field(..., min_length=1, max_length=20, description="Nuevo estado")


# === RESPONSES ===


class SellerResponse(BaseModel):
    id: int
    name: str
    commission_rate: str

    @classmethod
    def from_domain(cls, seller: Seller) -> "SellerResponse":
        return cls(id=seller.id, name=seller.name, commission_rate=f"{seller.commission_rate:.2f}")


class OrderItemResponse(BaseModel):
    id: int
    product_id: int
    quantity: int
    unit_price: str
    total_price: str
    unit_price_cents: int
    total_price_cents: int

    @classmethod
    def from_domain(cls, item: OrderItem, currency: str) -> "OrderItemResponse":
        return cls(
            id=item.id,
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=_display(item.unit_price, currency),
            total_price=_display(item.total_price, currency),
            unit_price_cents=item.unit_price,
            total_price_cents=item.total_price,
        )


class CommissionResponse(BaseModel):
    id: int
    order_item_id: int
    store_id: int
    commission_rate: str
    commission_amount: str
    commission_amount_cents: int
    status: str
    paid_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, commission: Commission, currency: str) -> "CommissionResponse":
        return cls(
            id=commission.id,
            order_item_id=commission.order_item_id,
            store_id=commission.store_id,
            commission_rate=f"{commission.commission_rate:.2f}",
            commission_amount=_display(commission.commission_amount, currency),
            commission_amount_cents=commission.commission_amount,
            status=commission.status.value,
            paid_at=commission.paid_at,
            created_at=commission.created_at,
        )


class StoreOrderResponse(BaseModel):
    id: int
    parent_order_id: int
    customer_id: int
    store_id: int
    order_number: str
    total_amount: str
    total_amount_cents: int
    currency: str
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, store_order: StoreOrder) -> "StoreOrderResponse":
        return cls(
            id=store_order.id,
            parent_order_id=store_order.parent_order_id,
            customer_id=store_order.customer_id,
            store_id=store_order.store_id,
            order_number=store_order.order_number,
            total_amount=store_order.total.to_display(),
            total_amount_cents=store_order.total_amount,
            currency=store_order.currency,
            status=store_order.status.value,
            created_at=store_order.created_at,
            updated_at=store_order.updated_at,
        )


class ParentOrderResponse(BaseModel):
    id: int
    customer_id: int
    order_number: str
    total_amount: str
    total_amount_cents: int
    currency: str
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order: ParentOrder) -> "ParentOrderResponse":
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            order_number=order.order_number,
            total_amount=order.total.to_display(),
            total_amount_cents=order.total_amount,
            currency=order.currency,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class StoreOrderGroupResponse(BaseModel):
    store_order: StoreOrderResponse
    items: list[OrderItemResponse]
    seller: Optional[SellerResponse] = None
    commissions: list[CommissionResponse] = Field(default_factory=list)
    item_count: int

    @classmethod
    def from_domain(cls, group: StoreOrderGroup) -> "StoreOrderGroupResponse":
        currency = group.store_order.currency
        return cls(
            store_order=StoreOrderResponse.from_domain(group.store_order),
            items=[OrderItemResponse.from_domain(item, currency) for item in group.items],
            seller=SellerResponse.from_domain(group.seller) if group.seller else None,
            commissions=[CommissionResponse.from_domain(c, currency) for c in group.commissions],
            item_count=group.item_count,
        )


class OrderSummaryResponse(BaseModel):
    parent_order: ParentOrderResponse
    store_orders: list[StoreOrderGroupResponse]
    total_amount: str
    total_stores: int

    @classmethod
    def from_domain(cls, summary: OrderSummary) -> "OrderSummaryResponse":
        return cls(
            parent_order=ParentOrderResponse.from_domain(summary.parent_order),
            store_orders=[StoreOrderGroupResponse.from_domain(group) for group in summary.store_orders],
            total_amount=summary.parent_order.total.to_display(),
            total_stores=summary.total_stores,
        )


class SellerOrderResponse(BaseModel):
    store_order: StoreOrderResponse
    items: list[OrderItemResponse]
    seller: Optional[SellerResponse] = None
    item_count: int

    @classmethod
    def from_domain(cls, summary: StoreOrderSummary) -> "SellerOrderResponse":
        currency = summary.store_order.currency
        return cls(
            store_order=StoreOrderResponse.from_domain(summary.store_order),
            items=[OrderItemResponse.from_domain(item, currency) for item in summary.items],
            seller=SellerResponse.from_domain(summary.seller) if summary.seller else None,
            item_count=summary.item_count,
        )


class OrderStatsResponse(BaseModel):
    total_orders: int
    total_revenue: str
    total_revenue_cents: int
    pending_orders: int
    processing_orders: int
    completed_orders: int
    cancelled_orders: int

    @classmethod
    def from_domain(cls, stats: OrderStats, currency: str) -> "OrderStatsResponse":
        return cls(
            total_orders=stats.total_orders,
            total_revenue=_display(stats.total_revenue, currency),
            total_revenue_cents=stats.total_revenue,
            pending_orders=stats.pending_orders,
            processing_orders=stats.processing_orders,
            completed_orders=stats.completed_orders,
            cancelled_orders=stats.cancelled_orders,
        )


class CommissionTotalsResponse(BaseModel):
    store_id: int
    total_amount: str
    pending_amount: str
    paid_amount: str
    total_amount_cents: int
    commission_count: int

    @classmethod
    def from_domain(cls, totals: CommissionTotals, currency: str) -> "CommissionTotalsResponse":
        return cls(
            store_id=totals.store_id,
            total_amount=_display(totals.total_amount, currency),
            pending_amount=_display(totals.pending_amount, currency),
            paid_amount=_display(totals.paid_amount, currency),
            total_amount_cents=totals.total_amount,
            commission_count=totals.commission_count,
        )
