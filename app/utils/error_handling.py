"""
Error handling utilities for service operations.
"""

from functools import wraps
from typing import Any, Callable, Dict

import structlog

from app.exceptions import ClassroomException, DatabaseError

logger = structlog.get_logger()


def format_database_error(error: Exception, operation: str) -> Dict[str, Any]:
    """
    Format unexpected errors into a consistent structure for logging.

    Args:
        error: The exception that occurred
        operation: The operation that was being performed

    Returns:
        Dictionary with formatted error information
    """
    return {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "operation": operation,
    }


def handle_database_errors(message: str):
    """
    Decorator giving a service operation a single failure boundary.

    Application exceptions (not found, conflict, validation, internal) pass
    through unchanged; anything else is logged and replaced by a
    DatabaseError carrying the fixed ``message``.

    Args:
        message: Client-facing message, e.g. "Failed to fetch classes"
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ClassroomException:
                raise
            except Exception as e:
                logger.exception(
                    f"Unexpected error in {func.__name__}",
                    **format_database_error(e, func.__name__),
                )
                raise DatabaseError(message, operation=func.__name__) from e

        return wrapper

    return decorator
