"""Dependencias compartidas por los endpoints de órdenes."""

from fastapi import Request

from app.services.orders import OrderServices


def get_order_services(request: Request) -> OrderServices:
    """Servicios de órdenes creados en el lifespan de la aplicación."""
    return request.app.state.order_services
