"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the `users` table.
Histories are stored as JSONB arrays on the row.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.database import INVALID_TEXT_REPRESENTATION, UNIQUE_VIOLATION
from shared.repository import BaseRepository
from .exceptions import ConcurrentUpdateError, DuplicateAccountError
from .models import LedgerEntry, NewUser, UserRecord, UserRole

TABLE = "users"


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for user records.

    Note: This repository does NOT perform authorization checks.
    """

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        row = self._select_one(TABLE, "email", email.lower())
        return self._map_to_user(row) if row else None

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        row = self._select_one(TABLE, "id", user_id)
        return self._map_to_user(row) if row else None

    def get_by_user_name(self, user_name: str) -> Optional[UserRecord]:
        row = self._select_one(TABLE, "user_name", user_name)
        return self._map_to_user(row) if row else None

    def list_all(self) -> list[UserRecord]:
        result = self._db.table(TABLE).select("*").order("created_at").execute()
        return [self._map_to_user(row) for row in result.data]

    def create(self, user: NewUser) -> UserRecord:
        """
        Create a new user row.

        The email and user_name columns are unique; a violation is
        reported as DuplicateAccountError.
        """
        data = {
            "name": user.name,
            "user_name": user.user_name,
            "email": user.email.lower(),
            "password_hash": user.password_hash,
            "role": UserRole.USER.value,
            "verified": False,
            "balance": "0",
            "activation_code": user.activation_code,
            "verification_token_id": user.verification_token_id,
            "referred_by": user.referred_by,
            "earnings": [],
            "plan_purchases": [],
            "version": 0,
        }
        try:
            result = self._db.table(TABLE).insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateAccountError("Email or user name already exists")
            raise
        return self._map_to_user(result.data[0])

    def save(self, user: UserRecord) -> UserRecord:
        """
        Compare-and-swap update guarded by the version column.

        Args:
            user: Record as modified by the caller, carrying the version it was read at

        Returns:
            The stored record with the incremented version.

        Raises:
            ConcurrentUpdateError: If no row matched (id, version)
        """
        data = self._map_to_row(user)
        data["version"] = user.version + 1
        data["updated_at"] = datetime.now(timezone.utc).isoformat()

        result = (
            self._db.table(TABLE)
            .update(data)
            .eq("id", user.id)
            .eq("version", user.version)
            .execute()
        )
        if not result.data:
            raise ConcurrentUpdateError(user.id)
        return self._map_to_user(result.data[0])

    def delete(self, user_id: str) -> bool:
        try:
            result = self._db.table(TABLE).delete().eq("id", user_id).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return False
            raise
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_row(self, user: UserRecord) -> dict[str, Any]:
        return {
            "name": user.name,
            "user_name": user.user_name,
            "email": user.email,
            "password_hash": user.password_hash,
            "role": user.role.value,
            "verified": user.verified,
            "balance": str(user.balance),
            "plan_id": user.plan_id,
            "plan_validity_token": user.plan_validity_token,
            "activation_code": user.activation_code,
            "verification_token_id": user.verification_token_id,
            "reset_token_id": user.reset_token_id,
            "referred_by": user.referred_by,
            "earnings": [e.model_dump(mode="json") for e in user.earnings],
            "plan_purchases": [e.model_dump(mode="json") for e in user.plan_purchases],
        }

    def _map_to_user(self, data: dict[str, Any]) -> UserRecord:
        """Map database row to UserRecord model."""
        return UserRecord(
            id=str(data["id"]),
            name=data["name"],
            user_name=data["user_name"],
            email=data["email"],
            password_hash=data["password_hash"],
            role=UserRole(data.get("role") or UserRole.USER.value),
            verified=bool(data.get("verified", False)),
            balance=self._decimal(data.get("balance")),
            plan_id=str(data["plan_id"]) if data.get("plan_id") else None,
            plan_validity_token=data.get("plan_validity_token"),
            activation_code=data.get("activation_code"),
            verification_token_id=data.get("verification_token_id"),
            reset_token_id=data.get("reset_token_id"),
            referred_by=data.get("referred_by"),
            earnings=[LedgerEntry(**e) for e in data.get("earnings") or []],
            plan_purchases=[LedgerEntry(**e) for e in data.get("plan_purchases") or []],
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            version=int(data.get("version") or 0),
        )
