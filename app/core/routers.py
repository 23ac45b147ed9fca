"""
Configuración centralizada de routers para la aplicación FastAPI.

Este módulo se encarga de registrar todos los routers de la API,
configurar endpoints base y organizar las rutas de manera estructurada.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.v1.endpoints.commissions import router as commissions_router
from app.api.v1.endpoints.orders import router as orders_router
from app.core.config import get_settings

logger = logging.getLogger(__name__)


def create_root_endpoints(app: FastAPI) -> None:
    """
    Crea endpoints raíz de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()

    @app.get("/", tags=["Root"], summary="API Info")
    async def root():
        return {
            "message": settings.APP_NAME,
            "description": "Multi-vendor order decomposition and commission accounting",
            "version": settings.APP_VERSION,
            "status": "running",
            "documentation": "/docs" if (settings.DEBUG or settings.ENABLE_DOCS) else "disabled",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "health": "/health",
                "orders": "/api/v1/orders",
                "commissions": "/api/v1/commissions",
            },
        }

    @app.get("/ping", tags=["Root"], summary="Simple Ping")
    async def ping():
        return {"message": "pong", "timestamp": datetime.now(timezone.utc).isoformat()}


def create_health_endpoints(app: FastAPI) -> None:
    """
    Crea el endpoint de health check.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()

    @app.get("/health", tags=["Health"], summary="Health Check")
    async def health_check(request: Request):
        """
        Verifica que la base de datos de órdenes responda.

        Returns:
            JSONResponse 200 si está sana, 503 si no
        """
        conn_db = getattr(request.app.state, "conn_db", None)
        database_ok = conn_db is not None and await conn_db.test_connection()

        return JSONResponse(
            status_code=200 if database_ok else 503,
            content={
                "status": "healthy" if database_ok else "unhealthy",
                "version": settings.APP_VERSION,
                "environment": settings.ENVIRONMENT,
                "services": {"database": database_ok},
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )


def configure_api_v1_routers(app: FastAPI) -> None:
    """
    Configura todos los routers de la API v1.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando routers de API v1...")

    app.include_router(
        orders_router,
        prefix="/api/v1/orders",
        tags=["Orders"],
        responses={
            404: {"description": "Order, product or store not found"},
            409: {"description": "Status transition not allowed"},
            422: {"description": "Invalid order request"},
        },
    )
    logger.info("✅ Router de órdenes configurado")

    app.include_router(
        commissions_router,
        prefix="/api/v1/commissions",
        tags=["Commissions"],
        responses={
            404: {"description": "Commission not found"},
            409: {"description": "Status transition not allowed"},
        },
    )
    logger.info("✅ Router de comisiones configurado")


def configure_all_routers(app: FastAPI) -> None:
    """
    Configura todos los routers de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando todos los routers...")

    create_root_endpoints(app)
    create_health_endpoints(app)
    configure_api_v1_routers(app)

    logger.info("✅ Todos los routers configurados correctamente")
