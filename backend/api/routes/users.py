"""
User account endpoints.

Plan purchase, ad-click earning and cooldown grants for the logged-in
user, password change, and admin user management.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from modules.auth.exceptions import InsufficientPermissionsError
from modules.auth.interfaces import IAuthService
from modules.auth.models import AuthContext, ChangePasswordRequest, MessageResponse
from modules.earnings.interfaces import ICooldownService
from modules.earnings.models import (
    CooldownStatus,
    EarnRequest,
    EarnResponse,
    GrantListResponse,
)
from modules.plans.interfaces import IEntitlementService
from modules.plans.models import PurchaseRequest, PurchaseResponse
from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserStore
from modules.users.models import (
    ProfileUpdateRequest,
    UserListResponse,
    UserRecord,
    UserResponse,
    UserRole,
)

from ..dependencies import (
    get_auth_service,
    get_cooldown_service,
    get_entitlement_service,
    get_user_store,
)
from ..middleware.auth import get_current_user, require_admin

router = APIRouter()


class CheckClickAdRequest(BaseModel):
    """Ad to check the cooldown for."""

    ad_id: str = Field(..., min_length=1, alias="id")

    model_config = {"populate_by_name": True}


@router.post("/buyPlan", response_model=PurchaseResponse)
async def buy_plan(
    request: PurchaseRequest,
    user: AuthContext = Depends(get_current_user),
    entitlements: IEntitlementService = Depends(get_entitlement_service),
) -> PurchaseResponse:
    """
    Buy a plan with the account balance.

    Fails while another plan is still active or when the balance does not
    exceed the price.
    """
    result = await entitlements.purchase(user.identity, request.plan)
    return PurchaseResponse(message=f"Plan {result.plan.name} activated", result=result)


@router.post("/userEarning", response_model=EarnResponse)
async def earn(
    request: EarnRequest,
    user: AuthContext = Depends(get_current_user),
    cooldowns: ICooldownService = Depends(get_cooldown_service),
) -> EarnResponse:
    """Credit the plan's per-click reward for an ad, once per cooldown window."""
    result = await cooldowns.earn(user.identity, request.ad_id, label=request.name)
    return EarnResponse(message="Earning added", result=result)


@router.get("/getAllClickAd", response_model=GrantListResponse)
async def list_click_grants(
    user: AuthContext = Depends(get_current_user),
    cooldowns: ICooldownService = Depends(get_cooldown_service),
) -> GrantListResponse:
    """Ads the user is still on cooldown for. Expired grants are removed."""
    return GrantListResponse(grants=await cooldowns.list_grants(user.identity))


@router.put("/checkClickAdToken", response_model=CooldownStatus)
async def check_click_grant(
    request: CheckClickAdRequest,
    user: AuthContext = Depends(get_current_user),
    cooldowns: ICooldownService = Depends(get_cooldown_service),
) -> CooldownStatus:
    return await cooldowns.check(user.identity, request.ad_id)


@router.put("/changeUserPassword", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    user: AuthContext = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth.change_password(user, request.old_password, request.new_password)
    return MessageResponse(message="Password updated")


# -----------------------------------------------------------------------------
# User management
# -----------------------------------------------------------------------------


def _load_for(caller: AuthContext, user_id: str, users: IUserStore) -> UserRecord:
    """Fetch a user record the caller may see: their own, or any for an admin."""
    if not caller.is_admin and caller.user_id != user_id:
        raise InsufficientPermissionsError(UserRole.ADMIN.value, caller.role.value)
    user = users.get_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@router.get("/all", response_model=UserListResponse)
async def list_users(
    admin: AuthContext = Depends(require_admin),
    users: IUserStore = Depends(get_user_store),
) -> UserListResponse:
    return UserListResponse(users=[user.to_profile() for user in users.list_all()])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    caller: AuthContext = Depends(get_current_user),
    users: IUserStore = Depends(get_user_store),
) -> UserResponse:
    return UserResponse(user=_load_for(caller, user_id, users).to_profile())


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: ProfileUpdateRequest,
    caller: AuthContext = Depends(get_current_user),
    users: IUserStore = Depends(get_user_store),
) -> UserResponse:
    user = _load_for(caller, user_id, users)
    user.name = request.name
    return UserResponse(user=users.save(user).to_profile())


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    admin: AuthContext = Depends(require_admin),
    users: IUserStore = Depends(get_user_store),
) -> MessageResponse:
    """Delete an account. Its cooldown grants go with it."""
    if not users.delete(user_id):
        raise UserNotFoundError(user_id)
    return MessageResponse(message="User deleted")
