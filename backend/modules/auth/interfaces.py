"""
Authentication module interfaces.

The API layer depends on IAuthService and ICapabilityService, not the
concrete implementations. This enables testing with fakes and keeps the
route layer free of token handling.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.notifications.models import EmailMessage
from modules.users.models import UserProfile, UserRecord

from .models import AuthContext, LoginResult, RegisterRequest, VerificationLink


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for session authentication and account operations.
    """

    async def authenticate(self, token: Optional[str]) -> AuthContext:
        """
        Resolve a session token to the calling user.

        Args:
            token: Session token from the cookie or bearer header

        Returns:
            AuthContext with identity, role and profile

        Raises:
            MissingTokenError: If no token was presented
            InvalidTokenError / ExpiredTokenError: If verification fails
            UserNotFoundError: If the subject no longer exists
        """
        ...

    def require_admin(self, context: AuthContext) -> AuthContext:
        """
        Refine a context to admin-only access.

        Raises:
            InsufficientPermissionsError: If the caller is not an admin
        """
        ...

    async def register(
        self,
        request: RegisterRequest,
        referrer: Optional[str] = None,
    ) -> tuple[UserProfile, EmailMessage]:
        """
        Create an unverified account and build its activation mail.

        Raises:
            DuplicateAccountError: If the email or user name is taken
            WeakPasswordError: If the password is too short
        """
        ...

    async def login(self, email: str, password: str, admin: bool = False) -> LoginResult:
        """
        Check credentials and mint a session token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            EmailNotVerifiedError: Account not yet activated
            InsufficientPermissionsError: `admin` requested by a non-admin
        """
        ...

    async def change_password(
        self,
        context: AuthContext,
        old_password: str,
        new_password: str,
    ) -> None:
        """
        Replace the caller's password.

        Raises:
            InvalidCredentialsError: If the old password does not match
        """
        ...


@runtime_checkable
class ICapabilityService(Protocol):
    """
    Interface for single-use verification and password-reset capabilities.
    """

    async def issue_verification_link(
        self,
        user: UserRecord,
        ttl_minutes: Optional[int] = None,
    ) -> tuple[UserRecord, VerificationLink]:
        """Mint an activation code and link, recording them on the user."""
        ...

    async def issue_reset_link(self, user: UserRecord) -> tuple[UserRecord, str]:
        """Mint a password-reset link, recording its marker on the user."""
        ...

    async def request_verification(self, email: str) -> Optional[EmailMessage]:
        """
        Reissue an activation mail.

        Returns None, without raising, when there is nothing to send, so
        callers respond identically whether or not the account exists.
        """
        ...

    async def request_password_reset(self, email: str) -> Optional[EmailMessage]:
        """
        Issue a password-reset mail. Same silence rules as request_verification().
        """
        ...

    async def redeem_verification(self, raw_token: str) -> UserRecord:
        """
        Redeem an activation link and mark the account verified.

        Raises:
            InvalidTokenError / ExpiredTokenError / CapabilityConsumedError
            UserNotFoundError
        """
        ...

    async def redeem_reset(self, raw_token: str, new_password: str) -> UserRecord:
        """
        Redeem a password-reset link and set the new password.

        Raises:
            InvalidTokenError / ExpiredTokenError / CapabilityConsumedError
            UserNotFoundError, WeakPasswordError
        """
        ...

    async def activate_with_code(self, email: str, code: str) -> UserRecord:
        """
        Activate an account with the mailed code instead of the link.

        Raises:
            InvalidActivationCodeError
        """
        ...
