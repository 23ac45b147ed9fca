"""
Marketplace Orders - FastAPI Application Entry Point

Servicio de órdenes multi-vendedor: divide cada checkout en órdenes por
vendedor, calcula las comisiones del marketplace y expone consultas y
reportes sobre las órdenes persistidas.

Este archivo actúa como el punto de entrada principal de la aplicación,
orquestando todos los componentes de manera modular y mantenible.
"""

import logging

import uvicorn
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.exception_handlers import configure_exception_handlers
from app.core.lifespan import lifespan
from app.core.middleware import configure_all_middleware
from app.core.routers import configure_all_routers

logger = logging.getLogger(__name__)


def create_application() -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.

    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    settings = get_settings()
    logger.info("🏗️ Creando aplicación FastAPI...")

    docs_enabled = settings.DEBUG or settings.ENABLE_DOCS
    app = FastAPI(
        title=settings.APP_NAME,
        description="Multi-vendor order decomposition and commission accounting",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    # El orden es importante para el correcto funcionamiento
    # 1. Middleware (orden inverso de ejecución)
    configure_all_middleware(app)

    # 2. Manejadores de excepciones
    configure_exception_handlers(app)

    # 3. Routers y endpoints
    configure_all_routers(app)

    app.state.app_info = {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
    }

    logger.info("✅ Aplicación FastAPI creada y configurada")
    return app


# Instancia principal que usa el servidor ASGI
app = create_application()


if __name__ == "__main__":
    """
    Ejecutar la aplicación directamente para desarrollo.

    Para producción se recomienda usar:
    uvicorn app.main:app --host 0.0.0.0 --port 8080 --workers 4
    """
    settings = get_settings()
    logger.info("🚀 Iniciando aplicación desde main.py...")

    uvicorn_config = {
        "app": "app.main:app",
        "host": settings.HOST,
        "port": settings.PORT,
        "reload": settings.DEBUG,
        "log_level": settings.LOG_LEVEL.lower(),
        "access_log": True,
        "workers": 1 if settings.DEBUG else settings.WORKERS,
    }

    if settings.DEBUG:
        uvicorn_config["reload_dirs"] = ["app"]

    uvicorn.run(**uvicorn_config)
