"""
Custom exceptions for the profile history domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, storage backend, etc.).
"""

from typing import Any, Optional


class ProfileHistoryException(Exception):
    """Base exception for all profile history errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(ProfileHistoryException):
    """Raised when input validation fails."""

    def __init__(self, field: str, value: Any, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(
            message=message,
            details={"field": field, "value": str(value), "reason": reason},
        )


class StorageException(ProfileHistoryException):
    """Raised when the key-value store cannot be read or written."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Storage {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )


class CorruptedDataException(ProfileHistoryException):
    """Raised when a stored value cannot be decoded into domain records."""

    def __init__(self, key: str, reason: str):
        message = f"Corrupted data under '{key}': {reason}"
        super().__init__(message=message, details={"key": key, "reason": reason})


class AppNotFoundException(ProfileHistoryException):
    """Raised when an app cannot be resolved from the catalog."""

    def __init__(self, app: str):
        super().__init__(message=f'App "{app}" is not available.', details={"app": app})


class DuplicateAppException(ProfileHistoryException):
    """Raised when a custom app collides with an existing app value."""

    def __init__(self, value: str):
        super().__init__(
            message=f"App with value '{value}' already exists", details={"value": value}
        )
