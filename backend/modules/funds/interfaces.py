"""
Funds module interfaces.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from .models import (
    CashOut,
    CashOutRequest,
    Deposit,
    DepositRequest,
    NewCashOut,
    NewDeposit,
    TransferStatus,
)


@runtime_checkable
class IFundsStore(Protocol):
    """Persistence for deposit and cash-out requests."""

    def create_deposit(self, deposit: NewDeposit) -> Deposit:
        """
        Insert a pending deposit.

        Raises:
            DuplicateTransactionError: If the transaction ID was already used
        """
        ...

    def get_deposit(self, deposit_id: str) -> Optional[Deposit]:
        ...

    def list_deposits(self, user_id: Optional[str] = None) -> list[Deposit]:
        """Newest first; all users when `user_id` is None."""
        ...

    def set_deposit_status(
        self,
        deposit_id: str,
        status: TransferStatus,
        expected: TransferStatus,
        decided_at: Optional[datetime],
    ) -> Optional[Deposit]:
        """
        Move a deposit from `expected` to `status`.

        Returns None when the stored status is not `expected`, so only one
        of two concurrent decisions can win.
        """
        ...

    def create_cash_out(self, cash_out: NewCashOut) -> CashOut:
        ...

    def get_cash_out(self, cash_out_id: str) -> Optional[CashOut]:
        ...

    def list_cash_outs(self, user_id: Optional[str] = None) -> list[CashOut]:
        ...

    def set_cash_out_status(
        self,
        cash_out_id: str,
        status: TransferStatus,
        expected: TransferStatus,
        decided_at: Optional[datetime],
    ) -> Optional[CashOut]:
        ...


@runtime_checkable
class IFundsService(Protocol):
    """Deposit and cash-out requests and their admin decisions."""

    async def request_deposit(self, user_email: str, request: DepositRequest) -> Deposit:
        ...

    async def request_cash_out(self, user_email: str, request: CashOutRequest) -> CashOut:
        """
        Raises:
            InsufficientFundsError: If the amount exceeds the current balance
        """
        ...

    async def list_deposits(self, user_id: Optional[str] = None) -> list[Deposit]:
        ...

    async def list_cash_outs(self, user_id: Optional[str] = None) -> list[CashOut]:
        ...

    async def decide_deposit(self, deposit_id: str, status: TransferStatus) -> Deposit:
        """
        Approve or reject a pending deposit. Approval credits the balance.

        Raises:
            TransferNotFoundError, TransferAlreadyDecidedError,
            InvalidTransferStatusError
        """
        ...

    async def decide_cash_out(self, cash_out_id: str, status: TransferStatus) -> CashOut:
        """
        Approve or reject a pending cash-out. Approval debits the balance.

        Raises:
            TransferNotFoundError, TransferAlreadyDecidedError,
            InvalidTransferStatusError, InsufficientFundsError
        """
        ...
