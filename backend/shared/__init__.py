"""
Shared infrastructure for Adearn backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, CooldownProfile, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    AppError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ConfigurationError,
    ExternalServiceError,
)

__all__ = [
    "Settings",
    "CooldownProfile",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "AppError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "ConfigurationError",
    "ExternalServiceError",
]
