"""
Authentication module.

Handles session tokens, single-use verification and reset links, and
account registration and login.

Public API:
- IAuthService / ICapabilityService: Interfaces for auth operations
- AuthContext: The authenticated caller
- Auth exceptions: MissingTokenError, InvalidCredentialsError, etc.
"""

from .interfaces import IAuthService, ICapabilityService
from .models import AuthContext, LoginResult, SessionToken, VerificationLink
from .exceptions import (
    MissingTokenError,
    InvalidCredentialsError,
    EmailNotVerifiedError,
    InsufficientPermissionsError,
    CapabilityConsumedError,
    InvalidActivationCodeError,
    WeakPasswordError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ICapabilityService",
    # Models
    "AuthContext",
    "LoginResult",
    "SessionToken",
    "VerificationLink",
    # Exceptions
    "MissingTokenError",
    "InvalidCredentialsError",
    "EmailNotVerifiedError",
    "InsufficientPermissionsError",
    "CapabilityConsumedError",
    "InvalidActivationCodeError",
    "WeakPasswordError",
]
