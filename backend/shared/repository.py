"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, TypeVar, Generic, Optional

from postgrest.exceptions import APIError
from supabase import Client

from .database import INVALID_TEXT_REPRESENTATION


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class PlanRepository(BaseRepository[Plan]):
            def get_by_id(self, plan_id: str) -> Optional[Plan]:
                result = self._db.table("plans").select("*").eq("id", plan_id).execute()
                if not result.data:
                    return None
                return self._map_to_plan(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _select_one(self, table: str, column: str, value: Any) -> Optional[dict[str, Any]]:
        """
        Fetch a single row by column value.

        A malformed identifier (e.g. a non-UUID string against a uuid
        column) is reported by Postgres as 22P02; that is treated the same
        as a missing row.
        """
        try:
            result = self._db.table(table).select("*").eq(column, value).limit(1).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise
        if not result.data:
            return None
        return result.data[0]

    @staticmethod
    def _decimal(value: Any) -> Decimal:
        """Convert a numeric column to Decimal without float rounding."""
        if value is None:
            return Decimal("0")
        return Decimal(str(value))

    @staticmethod
    def _isoformat(value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value is not None else None
