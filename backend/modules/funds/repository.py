"""
Funds repository for database access.

Encapsulates Supabase queries for the `deposits` and `cash_outs` tables.
Status changes are conditional on the current status, so a request can
only be decided once.
"""

from datetime import datetime
from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.database import INVALID_TEXT_REPRESENTATION, UNIQUE_VIOLATION
from shared.repository import BaseRepository
from .exceptions import DuplicateTransactionError
from .models import CashOut, Deposit, NewCashOut, NewDeposit, TransferStatus

DEPOSITS_TABLE = "deposits"
CASH_OUTS_TABLE = "cash_outs"


class FundsRepository(BaseRepository[Deposit]):
    """
    Repository for deposit and cash-out requests.

    Note: This repository does NOT perform authorization checks.
    """

    # -------------------------------------------------------------------------
    # Deposits
    # -------------------------------------------------------------------------

    def create_deposit(self, deposit: NewDeposit) -> Deposit:
        data = {
            "user_id": deposit.user_id,
            "user_email": deposit.user_email,
            "amount": str(deposit.amount),
            "transaction_id": deposit.transaction_id,
            "phone": deposit.phone,
            "method": deposit.method,
            "status": TransferStatus.PENDING.value,
        }
        try:
            result = self._db.table(DEPOSITS_TABLE).insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateTransactionError(deposit.transaction_id)
            raise
        return self._map_to_deposit(result.data[0])

    def get_deposit(self, deposit_id: str) -> Optional[Deposit]:
        row = self._select_one(DEPOSITS_TABLE, "id", deposit_id)
        return self._map_to_deposit(row) if row else None

    def list_deposits(self, user_id: Optional[str] = None) -> list[Deposit]:
        return [self._map_to_deposit(row) for row in self._list(DEPOSITS_TABLE, user_id)]

    def set_deposit_status(
        self,
        deposit_id: str,
        status: TransferStatus,
        expected: TransferStatus,
        decided_at: Optional[datetime],
    ) -> Optional[Deposit]:
        row = self._set_status(DEPOSITS_TABLE, deposit_id, status, expected, decided_at)
        return self._map_to_deposit(row) if row else None

    # -------------------------------------------------------------------------
    # Cash-outs
    # -------------------------------------------------------------------------

    def create_cash_out(self, cash_out: NewCashOut) -> CashOut:
        data = {
            "user_id": cash_out.user_id,
            "user_email": cash_out.user_email,
            "amount": str(cash_out.amount),
            "method": cash_out.method,
            "account_number": cash_out.account_number,
            "note": cash_out.note,
            "status": TransferStatus.PENDING.value,
        }
        result = self._db.table(CASH_OUTS_TABLE).insert(data).execute()
        return self._map_to_cash_out(result.data[0])

    def get_cash_out(self, cash_out_id: str) -> Optional[CashOut]:
        row = self._select_one(CASH_OUTS_TABLE, "id", cash_out_id)
        return self._map_to_cash_out(row) if row else None

    def list_cash_outs(self, user_id: Optional[str] = None) -> list[CashOut]:
        return [self._map_to_cash_out(row) for row in self._list(CASH_OUTS_TABLE, user_id)]

    def set_cash_out_status(
        self,
        cash_out_id: str,
        status: TransferStatus,
        expected: TransferStatus,
        decided_at: Optional[datetime],
    ) -> Optional[CashOut]:
        row = self._set_status(CASH_OUTS_TABLE, cash_out_id, status, expected, decided_at)
        return self._map_to_cash_out(row) if row else None

    # -------------------------------------------------------------------------
    # Shared queries
    # -------------------------------------------------------------------------

    def _list(self, table: str, user_id: Optional[str]) -> list[dict[str, Any]]:
        query = self._db.table(table).select("*")
        if user_id:
            query = query.eq("user_id", user_id)
        return query.order("created_at", desc=True).execute().data

    def _set_status(
        self,
        table: str,
        transfer_id: str,
        status: TransferStatus,
        expected: TransferStatus,
        decided_at: Optional[datetime],
    ) -> Optional[dict[str, Any]]:
        data = {"status": status.value, "decided_at": self._isoformat(decided_at)}
        try:
            result = (
                self._db.table(table)
                .update(data)
                .eq("id", transfer_id)
                .eq("status", expected.value)
                .execute()
            )
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise
        return result.data[0] if result.data else None

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_deposit(self, data: dict[str, Any]) -> Deposit:
        return Deposit(
            transaction_id=data["transaction_id"],
            phone=data.get("phone") or "",
            **self._map_common(data),
        )

    def _map_to_cash_out(self, data: dict[str, Any]) -> CashOut:
        return CashOut(
            account_number=data.get("account_number") or "",
            note=data.get("note"),
            **self._map_common(data),
        )

    def _map_common(self, data: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": str(data["id"]),
            "user_id": str(data["user_id"]),
            "user_email": data["user_email"],
            "amount": self._decimal(data["amount"]),
            "method": data["method"],
            "status": TransferStatus(data.get("status") or TransferStatus.PENDING.value),
            "created_at": data.get("created_at"),
            "decided_at": data.get("decided_at"),
        }
