"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, AuthorizationError, ValidationError
from modules.tokens.exceptions import InvalidTokenError


class MissingTokenError(AuthenticationError):
    """Raised when no session token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not match an account."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class EmailNotVerifiedError(AuthorizationError):
    """Raised when an unverified account tries to log in."""

    def __init__(self, email: str):
        super().__init__(
            "Please verify your email address",
            code="EMAIL_NOT_VERIFIED",
            details={"email": email},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_role: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )


class CapabilityConsumedError(InvalidTokenError):
    """
    Raised when a verification or reset link has already been redeemed,
    or has been superseded by a newer link.
    """

    def __init__(self):
        super().__init__("This link has already been used or is no longer valid")
        self.code = "CAPABILITY_CONSUMED"


class InvalidActivationCodeError(ValidationError):
    """Raised when an activation code does not match."""

    def __init__(self):
        super().__init__("Invalid activation code", code="INVALID_ACTIVATION_CODE")


class WeakPasswordError(ValidationError):
    """Raised when a new password does not meet the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(
            f"Password must be at least {min_length} characters long",
            code="WEAK_PASSWORD",
            details={"min_length": min_length},
        )
