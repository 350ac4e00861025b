"""
Custom exceptions and error handling utilities for the Classroom application.
"""

from typing import Any, Dict, Optional


class ClassroomException(Exception):
    """Base exception class for all Classroom application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__
        super().__init__(message)


class ValidationError(ClassroomException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message, status_code=400, details=details, error_code="VALIDATION_ERROR"
        )


class NotFoundError(ClassroomException):
    """Raised when a resource is not found."""

    def __init__(
        self, message: str = "Resource not found", resource_type: Optional[str] = None
    ):
        details = {"resource_type": resource_type} if resource_type else {}
        super().__init__(
            message, status_code=404, details=details, error_code="NOT_FOUND_ERROR"
        )


class ConflictError(ClassroomException):
    """Raised when there's a conflict with the current state."""

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message, status_code=409, error_code="CONFLICT_ERROR")


class InternalError(ClassroomException):
    """Raised for unexpected server-side failures."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "INTERNAL_ERROR",
    ):
        super().__init__(
            message, status_code=500, details=details, error_code=error_code
        )


class DatabaseError(InternalError):
    """Raised when database operations fail."""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
    ):
        details = {"operation": operation} if operation else {}
        super().__init__(message, details=details, error_code="DATABASE_ERROR")


class InviteCodeGenerationError(InternalError):
    """Raised when every invite code draw collided with an existing class."""

    def __init__(self, attempts: int):
        super().__init__(
            "Failed to generate invite code",
            details={"attempts": attempts},
            error_code="INVITE_CODE_GENERATION_ERROR",
        )


def classify_integrity_error(exception: Exception) -> str:
    """
    Classify a storage integrity violation.

    Returns:
        str: one of "unique", "foreign_key", "not_null" or "other"
    """
    error_str = str(getattr(exception, "orig", None) or exception).lower()

    if "unique" in error_str or "duplicate key" in error_str:
        return "unique"
    elif "foreign key" in error_str:
        return "foreign_key"
    elif "not null" in error_str:
        return "not_null"

    return "other"
