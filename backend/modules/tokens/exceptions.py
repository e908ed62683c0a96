"""
Token module exceptions.

Expired tokens are kept distinct from invalid ones: callers that hold a
token as a cooldown or validity marker treat expiry as "the marker is gone"
rather than as a failure.
"""

from shared.exceptions import AuthenticationError


class TokenError(AuthenticationError):
    """Base exception for token verification failures."""

    pass


class InvalidTokenError(TokenError):
    """Raised when a token is malformed, tampered with, or for another purpose."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(TokenError):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")
