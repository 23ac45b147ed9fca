"""
Manejadores de excepciones centralizados para la aplicación FastAPI.

Este módulo traduce las excepciones de dominio y de infraestructura a
respuestas JSON consistentes, con el logging apropiado para cada caso.
"""

import logging
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.logging_config import request_id_var
from app.utils.error_handler import AppException, ValidationException, log_error

logger = logging.getLogger(__name__)


def _base_content(request: Request) -> dict:
    return {
        "path": str(request.url.path),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id_var.get() or request.headers.get("X-Request-ID"),
    }


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Manejador para excepciones personalizadas de la aplicación.

    Args:
        request: Request de FastAPI
        exc: Excepción personalizada de la app

    Returns:
        JSONResponse: Respuesta JSON con error formateado
    """
    settings = get_settings()
    log_error(
        exc,
        context={"url": str(request.url), "method": request.method},
        level=logging.ERROR if exc.is_critical else logging.WARNING,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "error_type": "application_error",
            "error_code": exc.error_code.value,
            "message": exc.message,
            "details": exc.details if (settings.DEBUG or not exc.is_critical) else None,
            **_base_content(request),
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationException) -> JSONResponse:
    """
    Manejador para errores de validación de datos.

    Args:
        request: Request de FastAPI
        exc: Excepción de validación

    Returns:
        JSONResponse: Respuesta JSON con detalles de validación
    """
    logger.warning(
        f"Validation Exception: {exc.message} - "
        f"Field: {exc.field} - "
        f"Value: {exc.invalid_value} - "
        f"URL: {request.url}"
    )

    return JSONResponse(
        status_code=422,
        content={
            "error": True,
            "error_type": "validation_error",
            "error_code": exc.error_code.value,
            "message": exc.message,
            "field": exc.field,
            "expected_format": exc.expected_format,
            **_base_content(request),
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Manejador para HTTPException estándar de FastAPI.

    Args:
        request: Request de FastAPI
        exc: HTTPException

    Returns:
        JSONResponse: Respuesta JSON estandarizada
    """
    logger.warning(f"HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "error_type": "http_error",
            "status_code": exc.status_code,
            "message": exc.detail,
            **_base_content(request),
        },
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Manejador global para excepciones no capturadas.

    Args:
        request: Request de FastAPI
        exc: Excepción no manejada

    Returns:
        JSONResponse: Respuesta JSON de error interno
    """
    settings = get_settings()
    logger.error(
        f"Unhandled Exception: {str(exc)} - "
        f"Type: {type(exc).__name__} - "
        f"URL: {request.url}",
        exc_info=exc,
    )

    # Respuesta genérica (sin exponer detalles internos)
    error_message = "Internal server error occurred"
    if settings.DEBUG:
        error_message = f"{type(exc).__name__}: {str(exc)}"

    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "error_type": "internal_server_error",
            "message": error_message,
            "traceback": "".join(traceback.format_exception(exc)) if settings.DEBUG else None,
            **_base_content(request),
        },
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configura todos los manejadores de excepciones de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando manejadores de excepciones...")

    # Manejadores específicos (orden de especificidad)
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)

    # Manejadores HTTP estándar
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Manejador global (debe ser el último)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("✅ Manejadores de excepciones configurados correctamente")
