"""
Signed token codec.

Issues and verifies HS256 JWTs carrying a TokenClaim. The codec holds no
state beyond its secret and clock; the token itself is the state.
"""

import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import jwt

from shared.exceptions import ConfigurationError

from .exceptions import InvalidTokenError, ExpiredTokenError
from .models import IssuedToken, TokenClaim, TokenPurpose

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    Symmetric signer/verifier for purpose-bound claims.

    Expiry is checked against the injected clock rather than inside PyJWT,
    after the signature has been verified, so a tampered token is always
    reported as invalid even when it is also past its expiry.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        clock: Optional[Clock] = None,
    ):
        if not secret:
            raise ConfigurationError(
                "Token signing secret is not configured",
                code="TOKEN_SECRET_MISSING",
            )
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock or utc_now

    def now(self) -> datetime:
        return self._clock()

    def issue(
        self,
        subject: str,
        purpose: TokenPurpose,
        ttl: timedelta,
        data: Optional[dict[str, Any]] = None,
    ) -> IssuedToken:
        """
        Sign a new claim.

        Args:
            subject: User identity (email)
            purpose: What the token may be used for
            ttl: Lifetime; must be positive
            data: Optional extra payload

        Returns:
            IssuedToken with the encoded token and its claim
        """
        if ttl.total_seconds() <= 0:
            raise ValueError("Token lifetime must be positive")

        issued_at = self._clock()
        claim = TokenClaim(
            sub=subject,
            purpose=purpose,
            jti=uuid.uuid4().hex,
            iat=int(issued_at.timestamp()),
            # Rounded up so a token never expires before its full lifetime
            exp=math.ceil((issued_at + ttl).timestamp()),
            data=data or {},
        )
        token = jwt.encode(claim.model_dump(mode="json"), self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, claim=claim)

    def verify(self, token: str, purpose: Optional[TokenPurpose] = None) -> TokenClaim:
        """
        Verify a token and return its claim.

        Raises:
            InvalidTokenError: Malformed, bad signature, or wrong purpose
            ExpiredTokenError: Valid signature but past expiry
        """
        if not token:
            raise InvalidTokenError("Token is empty")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "exp", "iat", "jti"],
                },
            )
            claim = TokenClaim(**payload)
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")
        except (TypeError, ValueError):
            raise InvalidTokenError("Invalid token claims")

        if purpose is not None and claim.purpose != purpose:
            raise InvalidTokenError(
                f"Token issued for {claim.purpose.value}, not {purpose.value}"
            )

        if self._clock().timestamp() >= claim.exp:
            raise ExpiredTokenError()

        return claim
