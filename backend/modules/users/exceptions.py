"""
Users module exceptions.
"""

from shared.exceptions import NotFoundError, ConflictError


class UserNotFoundError(NotFoundError):
    """Raised when a user record does not exist."""

    def __init__(self, identity: str):
        super().__init__(
            f"User not found: {identity}",
            code="USER_NOT_FOUND",
            details={"user": identity},
        )


class ConcurrentUpdateError(ConflictError):
    """Raised when a user record changed between read and save."""

    def __init__(self, user_id: str):
        super().__init__(
            "User record was modified by another request, try again",
            code="CONCURRENT_UPDATE",
            details={"user_id": user_id},
        )


class DuplicateAccountError(ConflictError):
    """Raised when an email or user name is already registered."""

    def __init__(self, message: str = "Account already exists", field: str = ""):
        super().__init__(
            message,
            code="DUPLICATE_ACCOUNT",
            details={"field": field} if field else {},
        )
