"""
Sistema de manejo de errores personalizado.

Este módulo define todas las excepciones personalizadas de la aplicación
y proporciona utilidades para manejo consistente de errores.

Convención: las operaciones de comando (crear orden, cambiar estado) lanzan
excepciones; las consultas devuelven None cuando la entidad no existe.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Códigos de error estandardizados para la aplicación.
    """

    # Errores generales
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Errores de base de datos
    DATABASE_QUERY_FAILED = "DATABASE_QUERY_FAILED"

    # Errores de catálogo durante la creación de órdenes
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCT_UNASSIGNED = "PRODUCT_UNASSIGNED"
    SELLER_NOT_FOUND = "SELLER_NOT_FOUND"
    SELLER_NOT_SELLABLE = "SELLER_NOT_SELLABLE"

    # Errores de ciclo de vida
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"


class ErrorSeverity(Enum):
    """
    Niveles de severidad para errores.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Excepción base para todas las excepciones personalizadas de la aplicación.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_critical: bool = False,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandardizado
            details: Información adicional del error
            status_code: Código HTTP asociado
            severity: Severidad del error
            is_critical: Si requiere alerta inmediata
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.severity = severity
        self.is_critical = is_critical
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Excepción para errores de validación de datos.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        expected_format: Optional[str] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de validación.

        Args:
            message: Mensaje de error
            field: Campo que falló la validación
            invalid_value: Valor que causó el error
            expected_format: Formato esperado
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            status_code=422,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.expected_format = expected_format

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
                "expected_format": expected_format,
            }
        )


class DatabaseException(AppException):
    """
    Excepción para errores de la base de datos de órdenes.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        connection_type: str = "database",
        **kwargs,
    ):
        """
        Inicializa la excepción de base de datos.

        Args:
            message: Mensaje de error
            operation: Operación del repositorio que falló
            connection_type: Tipo de conexión
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.DATABASE_QUERY_FAILED,
            status_code=503,
            severity=ErrorSeverity.HIGH,
            is_critical=True,
            **kwargs,
        )
        self.operation = operation
        self.connection_type = connection_type

        self.details.update({"operation": operation, "connection_type": connection_type})


class OrderException(AppException):
    """
    Base para los errores que abortan la creación de una orden.
    """

    def __init__(self, message: str, error_code: ErrorCode, status_code: int, **kwargs):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status_code,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


class ProductNotFoundException(OrderException):
    """El producto solicitado no existe en el catálogo."""

    def __init__(self, product_id: int, **kwargs):
        super().__init__(
            message=f"Product with ID {product_id} not found",
            error_code=ErrorCode.PRODUCT_NOT_FOUND,
            status_code=404,
            **kwargs,
        )
        self.product_id = product_id
        self.details.update({"product_id": product_id})


class ProductUnassignedException(OrderException):
    """El producto existe pero no pertenece a ningún vendedor."""

    def __init__(self, product_id: int, product_name: Optional[str] = None, **kwargs):
        label = product_name or f"#{product_id}"
        super().__init__(
            message=f"Product {label} is not associated with any store",
            error_code=ErrorCode.PRODUCT_UNASSIGNED,
            status_code=422,
            **kwargs,
        )
        self.product_id = product_id
        self.details.update({"product_id": product_id, "product_name": product_name})


class SellerNotFoundException(OrderException):
    """El vendedor asociado al producto no existe."""

    def __init__(self, store_id: int, **kwargs):
        super().__init__(
            message=f"Store with ID {store_id} not found",
            error_code=ErrorCode.SELLER_NOT_FOUND,
            status_code=404,
            **kwargs,
        )
        self.store_id = store_id
        self.details.update({"store_id": store_id})


class SellerNotSellableException(OrderException):
    """El vendedor existe pero no está aprobado para vender."""

    def __init__(self, store_id: int, store_name: Optional[str] = None, **kwargs):
        super().__init__(
            message=f"Store {store_name or store_id} is not approved for selling",
            error_code=ErrorCode.SELLER_NOT_SELLABLE,
            status_code=422,
            **kwargs,
        )
        self.store_id = store_id
        self.details.update({"store_id": store_id, "store_name": store_name})


class InvalidStatusTransitionException(AppException):
    """
    Excepción para cambios de estado no permitidos por la máquina de estados.
    """

    def __init__(
        self,
        entity: str,
        current_status: str,
        requested_status: str,
        entity_id: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(
            message=f"Cannot change {entity} {entity_id} from '{current_status}' to '{requested_status}'",
            error_code=ErrorCode.INVALID_STATUS_TRANSITION,
            status_code=409,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.entity = entity
        self.entity_id = entity_id
        self.current_status = current_status
        self.requested_status = requested_status

        self.details.update(
            {
                "entity": entity,
                "entity_id": entity_id,
                "current_status": current_status,
                "requested_status": requested_status,
            }
        )


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Loggea un error de manera consistente.

    Args:
        exception: Excepción a loggear
        context: Contexto adicional
        level: Nivel de logging
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "is_critical": exception.is_critical,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {str(exception)}"

    logger.log(level, message, extra=log_data)
