"""
Earnings repositories for database access.

Encapsulates Supabase queries for:
- works (ad catalog)
- click_ads (cooldown grants, UNIQUE (user_email, ad_id))
"""

import logging
from datetime import datetime
from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.database import INVALID_TEXT_REPRESENTATION, UNIQUE_VIOLATION
from shared.repository import BaseRepository
from .models import ClickGrant, NewClickGrant, NewWork, Work, WorkUpdate

logger = logging.getLogger(__name__)

WORKS_TABLE = "works"
GRANTS_TABLE = "click_ads"


class WorkRepository(BaseRepository[Work]):
    """Repository for the `works` table."""

    def get_by_id(self, ad_id: str) -> Optional[Work]:
        row = self._select_one(WORKS_TABLE, "id", ad_id)
        return self._map_to_work(row) if row else None

    def list_all(self) -> list[Work]:
        result = self._db.table(WORKS_TABLE).select("*").order("created_at").execute()
        return [self._map_to_work(row) for row in result.data]

    def create(self, work: NewWork) -> Work:
        result = self._db.table(WORKS_TABLE).insert({"name": work.name, "link": work.link}).execute()
        return self._map_to_work(result.data[0])

    def update(self, ad_id: str, changes: WorkUpdate) -> Optional[Work]:
        data = changes.model_dump(exclude_unset=True)
        if not data:
            return self.get_by_id(ad_id)

        try:
            result = self._db.table(WORKS_TABLE).update(data).eq("id", ad_id).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise
        return self._map_to_work(result.data[0]) if result.data else None

    def delete(self, ad_id: str) -> bool:
        try:
            result = self._db.table(WORKS_TABLE).delete().eq("id", ad_id).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return False
            raise
        return bool(result.data)

    def _map_to_work(self, data: dict[str, Any]) -> Work:
        return Work(id=str(data["id"]), name=data["name"], link=data.get("link"))


class ClickAdRepository(BaseRepository[ClickGrant]):
    """
    Repository for cooldown grants.

    The unique constraint on (user_email, ad_id) is what makes grant
    creation race-free: two concurrent inserts for the same pair cannot
    both succeed.
    """

    def get(self, user_email: str, ad_id: str) -> Optional[ClickGrant]:
        result = (
            self._db.table(GRANTS_TABLE)
            .select("*")
            .eq("user_email", user_email)
            .eq("ad_id", ad_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_grant(result.data[0])

    def list_for_user(self, user_email: str) -> list[ClickGrant]:
        result = (
            self._db.table(GRANTS_TABLE)
            .select("*")
            .eq("user_email", user_email)
            .order("created_at")
            .execute()
        )
        return [self._map_to_grant(row) for row in result.data]

    def try_insert(self, grant: NewClickGrant) -> Optional[ClickGrant]:
        data = {
            "user_email": grant.user_email,
            "ad_id": grant.ad_id,
            "ad_name": grant.ad_name,
            "token": grant.token,
            "expires_at": self._isoformat(grant.expires_at),
        }
        try:
            result = self._db.table(GRANTS_TABLE).insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                logger.warning(
                    "Grant for ad %s already held by %s", grant.ad_id, grant.user_email
                )
                return None
            raise
        return self._map_to_grant(result.data[0])

    def delete_if_token(self, user_email: str, ad_id: str, token: str) -> bool:
        result = (
            self._db.table(GRANTS_TABLE)
            .delete()
            .eq("user_email", user_email)
            .eq("ad_id", ad_id)
            .eq("token", token)
            .execute()
        )
        return bool(result.data)

    def delete_expired(self, before: datetime) -> int:
        result = (
            self._db.table(GRANTS_TABLE)
            .delete()
            .lt("expires_at", self._isoformat(before))
            .execute()
        )
        return len(result.data or [])

    def _map_to_grant(self, data: dict[str, Any]) -> ClickGrant:
        """Map database row to ClickGrant model."""
        return ClickGrant(
            id=str(data["id"]),
            user_email=data["user_email"],
            ad_id=str(data["ad_id"]),
            ad_name=data.get("ad_name") or "",
            token=data["token"],
            expires_at=data["expires_at"],
            created_at=data.get("created_at"),
        )
