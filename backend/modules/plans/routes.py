"""
Plan catalog endpoints.

Any logged-in user can list plans; the rest is admin-only.
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_plan_store
from api.middleware.auth import get_current_user, require_admin
from modules.auth.models import AuthContext, MessageResponse

from .exceptions import PlanNotFoundError
from .interfaces import IPlanStore
from .models import NewPlan, Plan, PlanListResponse, PlanUpdate

router = APIRouter()


@router.get("", response_model=PlanListResponse)
async def list_plans(
    user: AuthContext = Depends(get_current_user),
    catalog: IPlanStore = Depends(get_plan_store),
) -> PlanListResponse:
    """List purchasable plans, cheapest first."""
    return PlanListResponse(plans=catalog.list_all())


@router.post("", response_model=Plan, status_code=status.HTTP_201_CREATED)
async def create_plan(
    request: NewPlan,
    admin: AuthContext = Depends(require_admin),
    catalog: IPlanStore = Depends(get_plan_store),
) -> Plan:
    return catalog.create(request)


@router.get("/{plan_id}", response_model=Plan)
async def get_plan(
    plan_id: str,
    admin: AuthContext = Depends(require_admin),
    catalog: IPlanStore = Depends(get_plan_store),
) -> Plan:
    plan = catalog.get_by_id(plan_id)
    if plan is None:
        raise PlanNotFoundError(plan_id)
    return plan


@router.put("/{plan_id}", response_model=Plan)
async def update_plan(
    plan_id: str,
    request: PlanUpdate,
    admin: AuthContext = Depends(require_admin),
    catalog: IPlanStore = Depends(get_plan_store),
) -> Plan:
    """
    Change a plan.

    Users who already hold the plan keep their validity window; a new
    price or reward applies from their next purchase or click.
    """
    plan = catalog.update(plan_id, request)
    if plan is None:
        raise PlanNotFoundError(plan_id)
    return plan


@router.delete("/{plan_id}", response_model=MessageResponse)
async def delete_plan(
    plan_id: str,
    admin: AuthContext = Depends(require_admin),
    catalog: IPlanStore = Depends(get_plan_store),
) -> MessageResponse:
    if not catalog.delete(plan_id):
        raise PlanNotFoundError(plan_id)
    return MessageResponse(message="Plan deleted")
