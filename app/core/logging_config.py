"""
Configuración avanzada del sistema de logging.

Este módulo configura el logging de la aplicación con:
- Múltiples handlers (consola, archivo, rotación)
- Formateo personalizado con colores
- Logging estructurado en JSON para monitoreo
- Contexto de request y de operación de órdenes en cada registro
"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from app.core.config import get_settings

settings = get_settings()

# Contexto del request actual (lo establece el middleware HTTP)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_RESERVED_RECORD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


class ColoredFormatter(logging.Formatter):
    """
    Formatter personalizado que agrega colores a los logs en consola.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Verde
        "WARNING": "\033[33m",  # Amarillo
        "ERROR": "\033[31m",  # Rojo
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record):
        formatted = super().format(record)

        # Solo colorear si la salida es una terminal
        if hasattr(sys.stderr, "isatty") and sys.stderr.isatty():
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            formatted = formatted.replace(record.levelname, f"{color}{record.levelname}{reset}")

        return formatted


class StructuredFormatter(logging.Formatter):
    """
    Formatter para logging estructurado en JSON.
    Útil para sistemas de monitoreo como ELK Stack.
    """

    def format(self, record):
        """
        Formatea el record como JSON estructurado.

        Args:
            record: LogRecord a formatear

        Returns:
            str: Mensaje en formato JSON
        """
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "app_name": settings.APP_NAME,
            "app_version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        extra_fields = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_RECORD_FIELDS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class RequestContextFilter(logging.Filter):
    """
    Filtro que agrega el request_id actual a los logs.
    """

    def filter(self, record):
        request_id = request_id_var.get()
        if request_id and not hasattr(record, "request_id"):
            record.request_id = request_id
        return True


class OrderOperationFilter(logging.Filter):
    """
    Marca los registros emitidos por los módulos de órdenes y comisiones.
    """

    ORDER_MODULES = ("app.services.orders", "app.db.orders")

    def filter(self, record):
        if record.name.startswith(self.ORDER_MODULES):
            record.operation_type = "orders"
        return True


def setup_logging() -> None:
    """
    Configura el sistema de logging completo de la aplicación.
    """
    if settings.LOG_FILE_PATH:
        Path(settings.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_configuration())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL))

    request_filter = RequestContextFilter()
    order_filter = OrderOperationFilter()
    for handler in root_logger.handlers:
        handler.addFilter(request_filter)
        handler.addFilter(order_filter)

    configure_specific_loggers()

    logger = logging.getLogger(__name__)
    logger.info(f"Sistema de logging configurado - Nivel: {settings.LOG_LEVEL}")
    if settings.LOG_FILE_PATH:
        logger.info(f"Logs guardándose en: {settings.LOG_FILE_PATH}")


def get_logging_configuration() -> Dict[str, Any]:
    """
    Genera configuración completa de logging.

    Returns:
        Dict: Configuración para logging.config.dictConfig
    """
    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": settings.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": ("%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "colored": {
                "()": ColoredFormatter,
                "format": settings.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {"()": StructuredFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.LOG_LEVEL,
                "formatter": "colored" if settings.DEBUG else "standard",
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.error": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {"level": settings.LOG_LEVEL, "handlers": ["console"]},
    }

    if settings.LOG_FILE_PATH:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "detailed",
            "filename": settings.LOG_FILE_PATH,
            "maxBytes": settings.LOG_MAX_SIZE_MB * 1024 * 1024,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        error_log_path = settings.LOG_FILE_PATH.replace(".log", "_errors.log")
        config["handlers"]["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": error_log_path,
            "maxBytes": settings.LOG_MAX_SIZE_MB * 1024 * 1024,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        # JSON para monitoreo solo en producción
        if settings.is_production:
            config["handlers"]["json_file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "formatter": "json",
                "filename": settings.LOG_FILE_PATH.replace(".log", ".json"),
                "maxBytes": settings.LOG_MAX_SIZE_MB * 1024 * 1024,
                "backupCount": settings.LOG_BACKUP_COUNT,
                "encoding": "utf-8",
            }
            config["root"]["handlers"].append("json_file")

        config["root"]["handlers"].extend(["file", "error_file"])

    return config


def configure_specific_loggers() -> None:
    """
    Configura loggers específicos para diferentes módulos.
    """
    logging.getLogger("app.services.orders").setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    logging.getLogger("app.api").setLevel(logging.INFO)
    logging.getLogger("app.db").setLevel(logging.INFO if settings.DEBUG else logging.WARNING)

    # Reducir verbosidad de librerías externas
    for logger_name in ("httpx", "aiosqlite", "sqlalchemy.pool"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    sqlalchemy_logger = logging.getLogger("sqlalchemy.engine")
    sqlalchemy_logger.setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)


def log_order_operation(operation: str, **kwargs) -> None:
    """
    Logger específico para operaciones sobre órdenes.

    Args:
        operation: Tipo de operación (create_order, update_status, ...)
        **kwargs: Datos estructurados adicionales (order_number, totals, ...)
    """
    logger = logging.getLogger("app.services.orders.operation")

    extra_data = {
        "order_operation": operation,
        "operation_timestamp": datetime.now(timezone.utc).isoformat(),
        **kwargs,
    }

    logger.info(f"Order operation: {operation}", extra=extra_data)

