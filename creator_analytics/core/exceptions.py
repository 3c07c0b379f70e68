"""
Custom exceptions for Creator Analytics.

This module defines the typed failures raised inside the analytics engine.
The engine converts them into failed OperationResult payloads at the
boundary of every public operation.
"""

from typing import Any, Dict, Optional

from creator_analytics.models.base import ErrorCode


class AnalyticsException(Exception):
    """Base exception for the analytics engine."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AnalyticsException):
    """Raised when a creator or content item does not exist."""

    def __init__(self, resource: str, identifier: str, message: Optional[str] = None):
        message = message or f"{resource} with identifier '{identifier}' not found"
        super().__init__(
            message=message,
            error_code=ErrorCode.NOT_FOUND,
            details={"resource": resource, "identifier": identifier}
        )


class InsufficientDataError(AnalyticsException):
    """Raised when an entity exists but has no performance records to analyze."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INSUFFICIENT_DATA,
            details=details
        )


class ValidationError(AnalyticsException):
    """Raised when operation arguments are invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_ARGUMENT,
            details=details
        )
