"""
Authentication service implementation.

Sessions are stateless: the signed session token is the whole session,
and logging out only clears the client's cookie.
"""

import logging
from datetime import timedelta
from typing import Optional

from modules.notifications.models import EmailMessage
from modules.notifications.templates import activation_email
from modules.tokens.codec import TokenCodec
from modules.tokens.models import TokenPurpose
from modules.users.exceptions import DuplicateAccountError, UserNotFoundError
from modules.users.interfaces import IUserStore
from modules.users.models import NewUser, UserProfile, UserRole

from .capabilities import CapabilityTokenIssuer
from .exceptions import (
    EmailNotVerifiedError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    MissingTokenError,
    WeakPasswordError,
)
from .interfaces import IAuthService
from .models import AuthContext, LoginResult, RegisterRequest, SessionToken
from .passwords import MIN_PASSWORD_LENGTH, PasswordHasher

logger = logging.getLogger(__name__)


def normalize_user_name(user_name: str) -> str:
    """Collapse whitespace in a user name into single dashes."""
    return "-".join(user_name.strip().split())


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Verifies session tokens with the injected TokenCodec and resolves
    their subject through the user store.
    """

    def __init__(
        self,
        users: IUserStore,
        codec: TokenCodec,
        passwords: PasswordHasher,
        capabilities: CapabilityTokenIssuer,
        session_ttl_seconds: int = 24 * 60 * 60,
        app_name: str = "Adearn",
    ):
        self._users = users
        self._codec = codec
        self._passwords = passwords
        self._capabilities = capabilities
        self._session_ttl = timedelta(seconds=session_ttl_seconds)
        self._app_name = app_name

    async def authenticate(self, token: Optional[str]) -> AuthContext:
        if not token:
            raise MissingTokenError()

        claim = self._codec.verify(token, TokenPurpose.SESSION)

        user = self._users.get_by_email(claim.sub)
        if user is None:
            raise UserNotFoundError(claim.sub)

        return AuthContext(identity=user.email, role=user.role, profile=user.to_profile())

    def require_admin(self, context: AuthContext) -> AuthContext:
        if context.role != UserRole.ADMIN:
            raise InsufficientPermissionsError(UserRole.ADMIN.value, context.role.value)
        return context

    async def register(
        self,
        request: RegisterRequest,
        referrer: Optional[str] = None,
    ) -> tuple[UserProfile, EmailMessage]:
        email = request.email.lower()
        user_name = normalize_user_name(request.user_name)

        if self._users.get_by_email(email) is not None:
            raise DuplicateAccountError("Email already exists", field="email")
        if self._users.get_by_user_name(user_name) is not None:
            raise DuplicateAccountError("User name already exists", field="user_name")
        if len(request.password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(MIN_PASSWORD_LENGTH)

        referred_by = None
        if referrer:
            referring_user = self._users.get_by_user_name(referrer)
            if referring_user is not None:
                referred_by = referring_user.user_name

        user = self._users.create(
            NewUser(
                name=request.name.strip(),
                user_name=user_name,
                email=email,
                password_hash=self._passwords.hash(request.password),
                referred_by=referred_by,
            )
        )
        user, link = await self._capabilities.issue_verification_link(user)
        logger.info("Registered user %s", user.id)

        message = activation_email(
            user.email, user.name, link.link, code=link.code, app_name=self._app_name
        )
        return user.to_profile(), message

    async def login(self, email: str, password: str, admin: bool = False) -> LoginResult:
        user = self._users.get_by_email(email.lower())
        if user is None or not self._passwords.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        if admin and user.role != UserRole.ADMIN:
            raise InsufficientPermissionsError(UserRole.ADMIN.value, user.role.value)
        if not admin and not user.verified:
            raise EmailNotVerifiedError(user.email)

        issued = self._codec.issue(user.email, TokenPurpose.SESSION, self._session_ttl)
        return LoginResult(
            session=SessionToken(token=issued.token, expires_at=issued.claim.expires_at),
            profile=user.to_profile(),
        )

    async def change_password(
        self,
        context: AuthContext,
        old_password: str,
        new_password: str,
    ) -> None:
        user = self._users.get_by_email(context.identity)
        if user is None:
            raise UserNotFoundError(context.identity)
        if not self._passwords.verify(old_password, user.password_hash):
            raise InvalidCredentialsError("Old password is wrong")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(MIN_PASSWORD_LENGTH)

        user.password_hash = self._passwords.hash(new_password)
        self._users.save(user)
