"""
Deposit and cash-out service.

Commit order for a decision:
1. conditional status change pending -> success/rejected (the claim)
2. for success, the balance change in one compare-and-swap user save
If step 2 fails the request goes back to pending, so an admin can decide
it again and the balance is never moved twice.
"""

import logging
from decimal import Decimal
from typing import Callable, Optional, TypeVar

from modules.tokens.codec import Clock, utc_now
from modules.users.exceptions import ConcurrentUpdateError, UserNotFoundError
from modules.users.interfaces import IUserStore
from modules.users.models import UserRecord

from .exceptions import (
    InsufficientFundsError,
    InvalidTransferStatusError,
    TransferAlreadyDecidedError,
    TransferNotFoundError,
)
from .interfaces import IFundsService, IFundsStore
from .models import (
    CashOut,
    CashOutRequest,
    Deposit,
    DepositRequest,
    NewCashOut,
    NewDeposit,
    Transfer,
    TransferStatus,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Transfer)


class FundsService(IFundsService):
    """Records deposit and cash-out requests and applies admin decisions."""

    def __init__(
        self,
        users: IUserStore,
        store: IFundsStore,
        clock: Optional[Clock] = None,
        max_balance_attempts: int = 3,
    ):
        self._users = users
        self._store = store
        self._clock = clock or utc_now
        self._max_balance_attempts = max(1, max_balance_attempts)

    async def request_deposit(self, user_email: str, request: DepositRequest) -> Deposit:
        user = self._get_user(user_email)
        deposit = self._store.create_deposit(
            NewDeposit(user_id=user.id, user_email=user.email, **request.model_dump())
        )
        logger.info("User %s requested deposit %s of %s", user.id, deposit.id, deposit.amount)
        return deposit

    async def request_cash_out(self, user_email: str, request: CashOutRequest) -> CashOut:
        user = self._get_user(user_email)
        if request.amount > user.balance:
            raise InsufficientFundsError(request.amount, user.balance)

        cash_out = self._store.create_cash_out(
            NewCashOut(user_id=user.id, user_email=user.email, **request.model_dump())
        )
        logger.info("User %s requested cash-out %s of %s", user.id, cash_out.id, cash_out.amount)
        return cash_out

    async def list_deposits(self, user_id: Optional[str] = None) -> list[Deposit]:
        return self._store.list_deposits(user_id)

    async def list_cash_outs(self, user_id: Optional[str] = None) -> list[CashOut]:
        return self._store.list_cash_outs(user_id)

    async def decide_deposit(self, deposit_id: str, status: TransferStatus) -> Deposit:
        return self._decide(
            "deposit",
            deposit_id,
            status,
            get=self._store.get_deposit,
            set_status=self._store.set_deposit_status,
            sign=Decimal(1),
        )

    async def decide_cash_out(self, cash_out_id: str, status: TransferStatus) -> CashOut:
        return self._decide(
            "cash-out",
            cash_out_id,
            status,
            get=self._store.get_cash_out,
            set_status=self._store.set_cash_out_status,
            sign=Decimal(-1),
        )

    def _decide(
        self,
        kind: str,
        transfer_id: str,
        status: TransferStatus,
        get: Callable[[str], Optional[T]],
        set_status: Callable[..., Optional[T]],
        sign: Decimal,
    ) -> T:
        if status == TransferStatus.PENDING:
            raise InvalidTransferStatusError(status.value)

        transfer = get(transfer_id)
        if transfer is None:
            raise TransferNotFoundError(kind, transfer_id)
        if transfer.status != TransferStatus.PENDING:
            raise TransferAlreadyDecidedError(kind, transfer_id, transfer.status.value)

        decided = set_status(transfer_id, status, TransferStatus.PENDING, self._clock())
        if decided is None:
            # Another admin decided it between our read and update
            current = get(transfer_id)
            raise TransferAlreadyDecidedError(
                kind, transfer_id, current.status.value if current else status.value
            )

        if status == TransferStatus.SUCCESS:
            try:
                self._adjust_balance(transfer.user_id, sign * transfer.amount)
            except Exception:
                set_status(transfer_id, TransferStatus.PENDING, status, None)
                raise

        logger.info("%s %s for user %s marked %s", kind.capitalize(), transfer_id, transfer.user_id, status.value)
        return decided

    def _adjust_balance(self, user_id: str, delta: Decimal) -> UserRecord:
        """Apply `delta` to the balance, retrying on a lost version race."""
        attempt = 1
        while True:
            user = self._users.get_by_id(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            if user.balance + delta < 0:
                raise InsufficientFundsError(-delta, user.balance)

            user.balance = user.balance + delta
            try:
                return self._users.save(user)
            except ConcurrentUpdateError:
                if attempt >= self._max_balance_attempts:
                    raise
                logger.warning(
                    "Version conflict adjusting balance of user %s (attempt %d), reloading",
                    user_id, attempt,
                )
                attempt += 1

    def _get_user(self, user_email: str) -> UserRecord:
        user = self._users.get_by_email(user_email)
        if user is None:
            raise UserNotFoundError(user_email)
        return user
