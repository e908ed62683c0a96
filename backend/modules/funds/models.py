"""
Funds module data models.

Deposits are the only way money enters a user's balance and cash-outs the
only way it leaves, other than plan purchases and ad earnings. Both start
as pending requests that an admin approves or rejects.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TransferStatus(str, Enum):
    """Lifecycle of a deposit or cash-out request."""

    PENDING = "pending"
    SUCCESS = "success"
    REJECTED = "rejected"


class Transfer(BaseModel):
    """Fields shared by deposits and cash-outs."""

    id: str
    user_id: str
    user_email: str
    amount: Decimal
    method: str
    status: TransferStatus = TransferStatus.PENDING
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None


class Deposit(Transfer):
    """Money the user says they paid in, awaiting confirmation."""

    transaction_id: str
    phone: str


class CashOut(Transfer):
    """A request to pay part of the balance out to the user."""

    account_number: str
    note: Optional[str] = None


class DepositRequest(BaseModel):
    """Request body for a new deposit."""

    amount: Decimal = Field(..., gt=0)
    transaction_id: str = Field(..., min_length=1, alias="transactionID")
    phone: str = Field(..., min_length=1)
    method: str = Field(..., min_length=1, description="Payment channel, e.g. Bikash or Nagad")

    model_config = {"populate_by_name": True}


class CashOutRequest(BaseModel):
    """Request body for a new cash-out."""

    amount: Decimal = Field(..., gt=0)
    method: str = Field(..., min_length=1)
    account_number: str = Field(..., min_length=1, alias="accountNumber")
    note: Optional[str] = None

    model_config = {"populate_by_name": True}


class NewDeposit(DepositRequest):
    user_id: str
    user_email: str


class NewCashOut(CashOutRequest):
    user_id: str
    user_email: str


class StatusUpdateRequest(BaseModel):
    """Admin decision on a pending request."""

    status: TransferStatus


class DepositResponse(BaseModel):
    message: str
    deposit: Deposit


class DepositListResponse(BaseModel):
    deposits: list[Deposit]


class CashOutResponse(BaseModel):
    message: str
    cash_out: CashOut


class CashOutListResponse(BaseModel):
    cash_outs: list[CashOut]
