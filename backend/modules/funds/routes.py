"""
Deposit and cash-out endpoints.

Users submit requests and see their own; admins see everyone's and decide
pending requests.
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_funds_service
from api.middleware.auth import get_current_user, require_admin
from modules.auth.models import AuthContext

from .interfaces import IFundsService
from .models import (
    CashOutListResponse,
    CashOutRequest,
    CashOutResponse,
    DepositListResponse,
    DepositRequest,
    DepositResponse,
    StatusUpdateRequest,
)

deposits_router = APIRouter()
cash_outs_router = APIRouter()


@deposits_router.get("", response_model=DepositListResponse)
async def list_deposits(
    user: AuthContext = Depends(get_current_user),
    funds: IFundsService = Depends(get_funds_service),
) -> DepositListResponse:
    """The caller's deposits, or every deposit for an admin."""
    user_id = None if user.is_admin else user.user_id
    return DepositListResponse(deposits=await funds.list_deposits(user_id))


@deposits_router.post("", response_model=DepositResponse, status_code=status.HTTP_201_CREATED)
async def create_deposit(
    request: DepositRequest,
    user: AuthContext = Depends(get_current_user),
    funds: IFundsService = Depends(get_funds_service),
) -> DepositResponse:
    deposit = await funds.request_deposit(user.identity, request)
    return DepositResponse(message="Deposit submitted. Waiting for approval", deposit=deposit)


@deposits_router.patch("/status/{deposit_id}", response_model=DepositResponse)
async def update_deposit_status(
    deposit_id: str,
    request: StatusUpdateRequest,
    admin: AuthContext = Depends(require_admin),
    funds: IFundsService = Depends(get_funds_service),
) -> DepositResponse:
    """Approve (crediting the balance) or reject a pending deposit."""
    deposit = await funds.decide_deposit(deposit_id, request.status)
    return DepositResponse(message="Deposit status updated", deposit=deposit)


@cash_outs_router.get("", response_model=CashOutListResponse)
async def list_cash_outs(
    user: AuthContext = Depends(get_current_user),
    funds: IFundsService = Depends(get_funds_service),
) -> CashOutListResponse:
    """The caller's cash-outs, or every cash-out for an admin."""
    user_id = None if user.is_admin else user.user_id
    return CashOutListResponse(cash_outs=await funds.list_cash_outs(user_id))


@cash_outs_router.post("", response_model=CashOutResponse, status_code=status.HTTP_201_CREATED)
async def create_cash_out(
    request: CashOutRequest,
    user: AuthContext = Depends(get_current_user),
    funds: IFundsService = Depends(get_funds_service),
) -> CashOutResponse:
    cash_out = await funds.request_cash_out(user.identity, request)
    return CashOutResponse(message="Cash-out submitted. Waiting for approval", cash_out=cash_out)


@cash_outs_router.patch("/status/{cash_out_id}", response_model=CashOutResponse)
async def update_cash_out_status(
    cash_out_id: str,
    request: StatusUpdateRequest,
    admin: AuthContext = Depends(require_admin),
    funds: IFundsService = Depends(get_funds_service),
) -> CashOutResponse:
    """Approve (debiting the balance) or reject a pending cash-out."""
    cash_out = await funds.decide_cash_out(cash_out_id, request.status)
    return CashOutResponse(message="Cash-out status updated", cash_out=cash_out)
