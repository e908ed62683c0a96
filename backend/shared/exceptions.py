"""
Base exception classes for the Adearn backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class AppError(Exception):
    """
    Base exception for all Adearn errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AppError):
    """Resource not found."""

    pass


class ValidationError(AppError):
    """Input validation failed."""

    pass


class AuthenticationError(AppError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(AppError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConflictError(AppError):
    """The request conflicts with the current state of a resource."""

    pass


class ConfigurationError(AppError):
    """The server is missing configuration or holds inconsistent data."""

    pass


class ExternalServiceError(AppError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
