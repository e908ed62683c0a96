"""
Earnings module data models.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from modules.users.models import LedgerEntry


class Work(BaseModel):
    """An ad/work item users can click to earn."""

    id: str = Field(..., description="Work ID")
    name: str = Field(..., description="Display name")
    link: Optional[str] = Field(None, description="Ad URL")


class NewWork(BaseModel):
    """Admin request to add an ad to the catalog."""

    name: str = Field(..., min_length=1)
    link: Optional[str] = None


class WorkUpdate(BaseModel):
    """Admin request to change an ad. Omitted fields are left as they are."""

    name: Optional[str] = Field(None, min_length=1)
    link: Optional[str] = None


class NewClickGrant(BaseModel):
    """Fields for inserting a cooldown grant."""

    user_email: str
    ad_id: str
    ad_name: str
    token: str
    expires_at: datetime


class ClickGrant(BaseModel):
    """
    Marks that a user earned from an ad. The grant blocks further earning
    from that ad until its embedded cooldown token expires.
    """

    id: str = Field(..., description="Grant ID")
    user_email: str = Field(..., description="User the grant belongs to")
    ad_id: str = Field(..., description="Ad/work ID")
    ad_name: str = Field(..., description="Ad/work name at claim time")
    token: str = Field(..., exclude=True, description="Signed cooldown token")
    expires_at: datetime = Field(..., description="End of the cooldown window")
    created_at: Optional[datetime] = None


class CooldownState(str, Enum):
    """Earning state of a (user, ad) pair."""

    ELIGIBLE = "eligible"
    ON_COOLDOWN = "on_cooldown"


class CooldownStatus(BaseModel):
    """Result of a cooldown check for one ad."""

    ad_id: str
    state: CooldownState
    grant: Optional[ClickGrant] = None
    available_at: Optional[datetime] = Field(
        None,
        description="When earning from this ad is allowed again",
    )


class EarnRequest(BaseModel):
    """Request to earn from an ad click."""

    ad_id: str = Field(..., min_length=1, alias="id", description="Ad/work ID")
    name: Optional[str] = Field(None, description="Label for the earning history")

    model_config = {"populate_by_name": True}


class EarnResult(BaseModel):
    """Outcome of a successful earn."""

    reward: Decimal = Field(..., description="Amount credited")
    balance: Decimal = Field(..., description="Balance after crediting")
    earnings: list[LedgerEntry] = Field(..., description="Full earning history")
    grant: ClickGrant = Field(..., description="Cooldown grant now in force")


class EarnResponse(BaseModel):
    """API response for an earn."""

    message: str
    result: EarnResult


class GrantListResponse(BaseModel):
    """API response listing live grants."""

    grants: list[ClickGrant]


class WorkListResponse(BaseModel):
    """API response for the work catalog."""

    works: list[Work]
