"""
Users module data models.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, EmailStr


class UserRole(str, Enum):
    """User roles."""

    USER = "user"
    ADMIN = "admin"


class LedgerEntry(BaseModel):
    """
    One row of a user's earning or purchase history.

    Entries are appended and never edited or removed.
    """

    label: str = Field(..., description="What the entry is for (ad or plan name)")
    amount: Decimal = Field(..., description="Amount earned or spent")
    created_at: datetime = Field(..., description="When the entry was recorded")

    model_config = {"frozen": True}


class NewUser(BaseModel):
    """Fields required to create a user record."""

    name: str
    user_name: str
    email: EmailStr
    password_hash: str
    activation_code: Optional[str] = None
    verification_token_id: Optional[str] = None
    referred_by: Optional[str] = None


class UserRecord(BaseModel):
    """
    Full user record as persisted.

    `version` is bumped on every save and used as the compare-and-swap
    guard, so two requests that read the same record cannot both commit.
    """

    id: str = Field(..., description="User ID (UUID)")
    name: str
    user_name: str
    email: EmailStr
    password_hash: str
    role: UserRole = UserRole.USER
    verified: bool = False

    balance: Decimal = Decimal("0")
    plan_id: Optional[str] = None
    plan_validity_token: Optional[str] = None

    # Outstanding capability markers
    activation_code: Optional[str] = None
    verification_token_id: Optional[str] = None
    reset_token_id: Optional[str] = None

    referred_by: Optional[str] = None
    earnings: list[LedgerEntry] = Field(default_factory=list)
    plan_purchases: list[LedgerEntry] = Field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_profile(self) -> "UserProfile":
        """Read-only projection without credentials or token markers."""
        return UserProfile(
            id=self.id,
            name=self.name,
            user_name=self.user_name,
            email=self.email,
            role=self.role,
            verified=self.verified,
            balance=self.balance,
            plan_id=self.plan_id,
            referred_by=self.referred_by,
            earnings=list(self.earnings),
            plan_purchases=list(self.plan_purchases),
            created_at=self.created_at,
        )


class UserProfile(BaseModel):
    """User data safe to hand to route handlers and clients."""

    id: str
    name: str
    user_name: str
    email: EmailStr
    role: UserRole
    verified: bool
    balance: Decimal
    plan_id: Optional[str] = None
    referred_by: Optional[str] = None
    earnings: list[LedgerEntry] = Field(default_factory=list)
    plan_purchases: list[LedgerEntry] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}


class ProfileUpdateRequest(BaseModel):
    """Editable profile fields."""

    name: str = Field(..., min_length=1)


class UserListResponse(BaseModel):
    users: list[UserProfile]


class UserResponse(BaseModel):
    user: UserProfile
