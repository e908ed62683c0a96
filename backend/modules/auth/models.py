"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, EmailStr

from modules.users.models import UserProfile, UserRole


class AuthContext(BaseModel):
    """
    The authenticated caller, attached to a request by the session
    dependency and handed to route handlers.
    """

    identity: str = Field(..., description="User email (token subject)")
    role: UserRole = Field(default=UserRole.USER, description="User role")
    profile: UserProfile = Field(..., description="User data without credentials")

    model_config = {"frozen": True}  # Make immutable for safety

    @property
    def user_id(self) -> str:
        return self.profile.id

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class SessionToken(BaseModel):
    """A signed session token and its expiry."""

    token: str
    expires_at: datetime


class LoginResult(BaseModel):
    """Outcome of a successful login."""

    session: SessionToken
    profile: UserProfile


class VerificationLink(BaseModel):
    """Activation code and link mailed after registration."""

    code: str = Field(..., description="6-digit activation code")
    link: str = Field(..., description="Activation link carrying the token")
    expires_at: datetime


# -----------------------------------------------------------------------------
# Request / response bodies
# -----------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request to create an account."""

    name: str = Field(..., min_length=1)
    user_name: str = Field(..., min_length=1, alias="userName")
    email: EmailStr
    password: str = Field(..., min_length=1)

    model_config = {"populate_by_name": True}


class LoginRequest(BaseModel):
    """Email/password login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class EmailRequest(BaseModel):
    """Request carrying only an email (resend verification, forgot password)."""

    email: EmailStr


class ActivateCodeRequest(BaseModel):
    """Activate an account with the mailed code."""

    email: EmailStr
    code: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    """New password for a reset link."""

    password: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    """Change password while logged in."""

    old_password: str = Field(..., min_length=1, alias="oldPassword")
    new_password: str = Field(..., min_length=1, alias="newPassword")

    model_config = {"populate_by_name": True}


class AuthResponse(BaseModel):
    """Response to register, login and activation requests."""

    message: str
    user: Optional[UserProfile] = None
    token: Optional[str] = None


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str
