"""
Capability token issuer.

Verification and reset links carry a signed, short-lived token whose `jti`
is also recorded on the user record. Redemption requires the recorded
`jti` to match and then clears it, so each link works once, and issuing a
new link supersedes any older one still in flight.
"""

import hmac
import logging
import secrets
from datetime import timedelta
from typing import Optional

from modules.notifications.models import EmailMessage
from modules.notifications.templates import activation_email, reset_password_email
from modules.tokens.codec import TokenCodec
from modules.tokens.models import TokenClaim, TokenPurpose
from modules.tokens.transport import from_path_segment, to_path_segment
from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserStore
from modules.users.models import UserRecord

from .exceptions import (
    CapabilityConsumedError,
    InvalidActivationCodeError,
    WeakPasswordError,
)
from .interfaces import ICapabilityService
from .models import VerificationLink
from .passwords import MIN_PASSWORD_LENGTH, PasswordHasher

logger = logging.getLogger(__name__)


def create_activation_code() -> str:
    """Six random digits."""
    return f"{secrets.randbelow(1_000_000):06d}"


class CapabilityTokenIssuer(ICapabilityService):
    """Mints and redeems single-use email verification and reset links."""

    def __init__(
        self,
        users: IUserStore,
        codec: TokenCodec,
        passwords: PasswordHasher,
        base_url: str,
        verification_ttl_minutes: int = 15,
        resend_verification_ttl_minutes: int = 30,
        reset_ttl_minutes: int = 30,
        app_name: str = "Adearn",
    ):
        self._users = users
        self._codec = codec
        self._passwords = passwords
        self._base_url = base_url.rstrip("/")
        self._verification_ttl = verification_ttl_minutes
        self._resend_verification_ttl = resend_verification_ttl_minutes
        self._reset_ttl = reset_ttl_minutes
        self._app_name = app_name

    # -------------------------------------------------------------------------
    # Issuance
    # -------------------------------------------------------------------------

    async def issue_verification_link(
        self,
        user: UserRecord,
        ttl_minutes: Optional[int] = None,
    ) -> tuple[UserRecord, VerificationLink]:
        issued = self._codec.issue(
            user.email,
            TokenPurpose.EMAIL_VERIFICATION,
            timedelta(minutes=ttl_minutes or self._verification_ttl),
        )
        code = create_activation_code()

        user.activation_code = code
        user.verification_token_id = issued.claim.jti
        saved = self._users.save(user)

        link = VerificationLink(
            code=code,
            link=f"{self._base_url}/login/{to_path_segment(issued.token)}",
            expires_at=issued.claim.expires_at,
        )
        return saved, link

    async def issue_reset_link(self, user: UserRecord) -> tuple[UserRecord, str]:
        issued = self._codec.issue(
            user.email,
            TokenPurpose.PASSWORD_RESET,
            timedelta(minutes=self._reset_ttl),
        )
        user.reset_token_id = issued.claim.jti
        saved = self._users.save(user)
        return saved, f"{self._base_url}/resetpassword/{to_path_segment(issued.token)}"

    async def request_verification(self, email: str) -> Optional[EmailMessage]:
        user = self._users.get_by_email(email.lower())
        if user is None or user.verified:
            return None

        user, link = await self.issue_verification_link(
            user, ttl_minutes=self._resend_verification_ttl
        )
        return activation_email(
            user.email, user.name, link.link, code=link.code, app_name=self._app_name
        )

    async def request_password_reset(self, email: str) -> Optional[EmailMessage]:
        user = self._users.get_by_email(email.lower())
        if user is None:
            return None

        user, link = await self.issue_reset_link(user)
        return reset_password_email(user.email, user.name, link, app_name=self._app_name)

    # -------------------------------------------------------------------------
    # Redemption
    # -------------------------------------------------------------------------

    async def redeem_verification(self, raw_token: str) -> UserRecord:
        user, _ = self._resolve(raw_token, TokenPurpose.EMAIL_VERIFICATION)

        user.verified = True
        user.activation_code = None
        user.verification_token_id = None
        saved = self._users.save(user)
        logger.info("Account %s activated by link", saved.id)
        return saved

    async def redeem_reset(self, raw_token: str, new_password: str) -> UserRecord:
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(MIN_PASSWORD_LENGTH)

        user, _ = self._resolve(raw_token, TokenPurpose.PASSWORD_RESET)

        user.password_hash = self._passwords.hash(new_password)
        user.reset_token_id = None
        saved = self._users.save(user)
        logger.info("Password reset for user %s", saved.id)
        return saved

    async def activate_with_code(self, email: str, code: str) -> UserRecord:
        user = self._users.get_by_email(email.lower())
        if (
            user is None
            or not user.activation_code
            or not hmac.compare_digest(user.activation_code, code.strip())
        ):
            raise InvalidActivationCodeError()

        user.verified = True
        user.activation_code = None
        user.verification_token_id = None
        saved = self._users.save(user)
        logger.info("Account %s activated by code", saved.id)
        return saved

    def _resolve(self, raw_token: str, purpose: TokenPurpose) -> tuple[UserRecord, TokenClaim]:
        """Decode, verify, load the subject and check the outstanding marker."""
        claim = self._codec.verify(from_path_segment(raw_token), purpose)

        user = self._users.get_by_email(claim.sub)
        if user is None:
            raise UserNotFoundError(claim.sub)

        marker = (
            user.verification_token_id
            if purpose == TokenPurpose.EMAIL_VERIFICATION
            else user.reset_token_id
        )
        if marker is None or not hmac.compare_digest(marker, claim.jti):
            raise CapabilityConsumedError()

        return user, claim
