"""
Gestión del ciclo de vida de la aplicación FastAPI.

Este módulo maneja los eventos de startup y shutdown de la aplicación:
logging, conexión a la base de datos y creación de los servicios de órdenes.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.logging_config import setup_logging
from app.db.connection import get_db_connection
from app.services.orders import create_order_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestión del ciclo de vida de la aplicación.
    Maneja eventos de startup y shutdown de manera ordenada.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()

    # === STARTUP ===
    setup_logging()
    logger.info(f"🚀 Iniciando {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})...")

    try:
        await startup_initialize_database(app)
        startup_initialize_services(app)
        logger.info("🎉 Aplicación iniciada correctamente")

    except Exception as e:
        logger.error(f"❌ Error durante el startup: {e}")
        await shutdown_close_connections(app)
        raise

    # === YIELD (aplicación corriendo) ===
    yield

    # === SHUTDOWN ===
    logger.info(f"🛑 Cerrando {settings.APP_NAME}...")
    await shutdown_close_connections(app)
    logger.info("👋 Aplicación cerrada correctamente")


# === FUNCIONES DE STARTUP ===


async def startup_initialize_database(app: FastAPI) -> None:
    """Inicializa la conexión a la base de datos y crea las tablas si corresponde."""
    settings = get_settings()
    conn_db = get_db_connection()

    if not conn_db.is_initialized():
        logger.info("Inicializando conexión a base de datos...")
        await conn_db.initialize(create_tables=settings.DB_CREATE_TABLES)

    app.state.conn_db = conn_db
    logger.info(f"✅ Base de datos lista: {conn_db.get_engine_info()['backend']}")


def startup_initialize_services(app: FastAPI) -> None:
    """Crea los servicios de órdenes sobre la conexión inicializada."""
    if getattr(app.state, "order_services", None) is None:
        app.state.order_services = create_order_services(app.state.conn_db)
    logger.info("✅ Servicios de órdenes inicializados")


# === FUNCIONES DE SHUTDOWN ===


async def shutdown_close_connections(app: FastAPI) -> None:
    """Cierra la conexión a la base de datos."""
    conn_db = getattr(app.state, "conn_db", None)
    if conn_db is not None:
        await conn_db.close()
        app.state.conn_db = None
        logger.info("✅ Conexión a base de datos cerrada")
