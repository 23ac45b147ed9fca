"""
Base repository for order database operations.

Repositories work on a session owned by a unit of work. They flush but never
commit; transaction boundaries belong to the caller.
"""

import functools
import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.utils.error_handler import DatabaseException

logger = logging.getLogger(__name__)


def log_operation(operation_name: Optional[str] = None) -> Callable:
    """
    Decorator for logging repository operations.

    Driver errors are re-raised as DatabaseException; domain exceptions pass
    through untouched.

    Args:
        operation_name: Optional custom name for the operation
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            op_name = operation_name or f"{self.__class__.__name__}.{func.__name__}"
            logger.debug(f"Starting operation: {op_name}")

            try:
                result = await func(self, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"Operation failed: {op_name} - {e}")
                raise DatabaseException(
                    message=f"Database operation {op_name} failed: {str(e)}",
                    operation=op_name,
                    connection_type="query_execution",
                ) from e

            logger.debug(f"Operation successful: {op_name}")
            return result

        return wrapper

    return decorator


class BaseRepository:
    """Common state for repositories bound to a unit-of-work session."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._repository_name: str = self.__class__.__name__

    def __repr__(self) -> str:
        return f"<{self._repository_name}>"
