"""
Earnings module interfaces.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from .models import (
    ClickGrant,
    CooldownStatus,
    EarnResult,
    NewClickGrant,
    NewWork,
    Work,
    WorkUpdate,
)


@runtime_checkable
class IWorkCatalog(Protocol):
    """Read-only ad/work lookup."""

    def get_by_id(self, ad_id: str) -> Optional[Work]:
        """Return the work item, or None if it does not exist."""
        ...

    def list_all(self) -> list[Work]:
        """Return every work item."""
        ...


@runtime_checkable
class IWorkStore(IWorkCatalog, Protocol):
    """Work catalog with the admin write operations."""

    def create(self, work: NewWork) -> Work:
        ...

    def update(self, ad_id: str, changes: WorkUpdate) -> Optional[Work]:
        """Apply the set fields of `changes`. Returns None if the ad does not exist."""
        ...

    def delete(self, ad_id: str) -> bool:
        """Remove an ad. Returns False if it did not exist."""
        ...


@runtime_checkable
class IClickGrantStore(Protocol):
    """
    Persistence for cooldown grants, unique per (user_email, ad_id).
    """

    def get(self, user_email: str, ad_id: str) -> Optional[ClickGrant]:
        """Return the grant for this pair, live or stale, or None."""
        ...

    def list_for_user(self, user_email: str) -> list[ClickGrant]:
        """Return all grants held by a user, oldest first."""
        ...

    def try_insert(self, grant: NewClickGrant) -> Optional[ClickGrant]:
        """
        Insert a grant unless one already exists for the pair.

        This is the only way a grant is created and must be a single
        conditional write.

        Returns:
            The stored grant, or None if the pair was already taken
        """
        ...

    def delete_if_token(self, user_email: str, ad_id: str, token: str) -> bool:
        """
        Delete the pair's grant only if it still holds `token`.

        Returns:
            True if a row was deleted
        """
        ...

    def delete_expired(self, before: datetime) -> int:
        """Delete grants whose window ended before `before`; return the count."""
        ...


@runtime_checkable
class ICooldownService(Protocol):
    """Interface for ad-click earning and cooldown queries."""

    async def earn(self, user_email: str, ad_id: str, label: Optional[str] = None) -> EarnResult:
        """
        Credit one reward for an ad click and start its cooldown.

        Raises:
            UserNotFoundError: If the user does not exist
            NoActivePlanError: If the user has no active plan
            PlanMisconfiguredError: If the plan has no per-click reward
            WorkNotFoundError: If the ad does not exist
            AlreadyClaimedError: If a live grant exists for this ad
        """
        ...

    async def list_grants(self, user_email: str, reap: bool = True) -> list[ClickGrant]:
        """
        Return the user's live grants.

        Stale grants are filtered out and, when `reap` is set, deleted.
        """
        ...

    async def check(self, user_email: str, ad_id: str) -> CooldownStatus:
        """Report whether the user may earn from an ad now, reaping a stale grant."""
        ...

    async def sweep_expired(self) -> int:
        """Delete every grant past its window; return how many were removed."""
        ...
