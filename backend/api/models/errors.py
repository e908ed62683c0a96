"""
Error response models and status mapping.

Standardized error responses for the API.
"""

from typing import Any, Optional

from fastapi import status
from pydantic import BaseModel

from shared.exceptions import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class ErrorResponse(BaseModel):
    """Standard error response format (AppError.to_dict())."""

    error: str
    message: str
    details: dict[str, Any] = {}


# Most specific first; anything else is a client error
_STATUS_BY_TYPE: list[tuple[type[AppError], int]] = [
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
]


def status_for(error: AppError, default: Optional[int] = None) -> int:
    """HTTP status code for an application error."""
    for error_type, code in _STATUS_BY_TYPE:
        if isinstance(error, error_type):
            return code
    return default or status.HTTP_400_BAD_REQUEST
