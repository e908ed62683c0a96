"""
Token module data models.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TokenPurpose(str, Enum):
    """What a signed token may be used for."""

    SESSION = "session"
    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"
    CLICK_COOLDOWN = "click_cooldown"
    PLAN_VALIDITY = "plan_validity"


class TokenClaim(BaseModel):
    """
    Decoded payload of a signed token.

    Timestamps are whole seconds since the epoch, as carried in the JWT.
    """

    sub: str = Field(..., description="Subject (user email)")
    purpose: TokenPurpose = Field(..., description="Purpose the token is bound to")
    jti: str = Field(..., description="Unique token ID")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    data: dict[str, Any] = Field(default_factory=dict, description="Optional payload")

    model_config = {"frozen": True}

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=timezone.utc)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)


class IssuedToken(BaseModel):
    """A freshly signed token together with the claim it carries."""

    token: str
    claim: TokenClaim

    model_config = {"frozen": True}
