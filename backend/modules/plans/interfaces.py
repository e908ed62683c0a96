"""
Plans module interfaces.

The earnings module uses IEntitlementService to resolve the caller's
active plan without knowing how validity is tracked.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.users.models import UserRecord

from .models import NewPlan, Plan, PlanUpdate, PurchaseResult


@runtime_checkable
class IPlanCatalog(Protocol):
    """Read-only plan lookup."""

    def get_by_id(self, plan_id: str) -> Optional[Plan]:
        """Return the plan, or None if it does not exist."""
        ...

    def list_all(self) -> list[Plan]:
        """Return every plan, cheapest first."""
        ...


@runtime_checkable
class IPlanStore(IPlanCatalog, Protocol):
    """Plan catalog with the admin write operations."""

    def create(self, plan: NewPlan) -> Plan:
        """Insert a plan and return it with its new ID."""
        ...

    def update(self, plan_id: str, changes: PlanUpdate) -> Optional[Plan]:
        """Apply the set fields of `changes`. Returns None if the plan does not exist."""
        ...

    def delete(self, plan_id: str) -> bool:
        """
        Remove a plan. Returns False if it did not exist.

        Users holding the plan lose it the next time their entitlement is checked.
        """
        ...


@runtime_checkable
class IEntitlementService(Protocol):
    """Interface for plan purchase and entitlement checks."""

    async def purchase(self, user_email: str, plan_id: str) -> PurchaseResult:
        """
        Buy a plan.

        Raises:
            UserNotFoundError: If the user does not exist
            PlanAlreadyOwnedError: If a plan is still active
            PlanNotFoundError: If the plan does not exist
            InsufficientBalanceError: Unless balance > price
        """
        ...

    async def is_active(self, user: UserRecord) -> bool:
        """
        Re-verify the user's plan validity token.

        An expired or invalid assignment is cleared and persisted.
        """
        ...

    async def get_active_plan(self, user: UserRecord) -> tuple[UserRecord, Plan]:
        """
        Resolve the plan a user may earn under.

        Returns:
            The (possibly refreshed) user record and the active plan

        Raises:
            NoActivePlanError: No plan, or its validity lapsed
            PlanMisconfiguredError: The plan has no positive per-click reward
        """
        ...
