"""
Plans module data models.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from modules.users.models import LedgerEntry


class Plan(BaseModel):
    """A purchasable subscription plan."""

    id: str = Field(..., description="Plan ID")
    name: str = Field(..., description="Display name")
    price: Decimal = Field(..., description="Purchase price")
    validity_days: int = Field(default=1, ge=1, description="Days the plan stays active")
    per_click_reward: Optional[Decimal] = Field(
        None,
        description="Amount credited per ad click",
    )
    description: Optional[str] = None


class PurchaseRequest(BaseModel):
    """Request to buy a plan."""

    plan: str = Field(..., min_length=1, description="Plan ID to purchase")


class PurchaseResult(BaseModel):
    """Outcome of a successful purchase."""

    plan: Plan
    balance: Decimal = Field(..., description="Balance after the purchase")
    expires_at: datetime = Field(..., description="When the entitlement lapses")
    purchase: LedgerEntry = Field(..., description="History row added")


class PurchaseResponse(BaseModel):
    """API response for a plan purchase."""

    message: str
    result: PurchaseResult


class PlanListResponse(BaseModel):
    """API response for the plan catalog."""

    plans: list[Plan]


class NewPlan(BaseModel):
    """Admin request to add a plan to the catalog."""

    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0)
    validity_days: int = Field(default=1, ge=1)
    per_click_reward: Decimal = Field(..., gt=0)
    description: Optional[str] = None


class PlanUpdate(BaseModel):
    """Admin request to change a plan. Omitted fields are left as they are."""

    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, gt=0)
    validity_days: Optional[int] = Field(None, ge=1)
    per_click_reward: Optional[Decimal] = Field(None, gt=0)
    description: Optional[str] = None
