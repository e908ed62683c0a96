"""
Plan entitlement service.

A purchased plan is represented on the user record by the plan ID plus a
signed validity token whose expiry is the end of the plan. Validity is
re-checked lazily whenever the plan is consulted; nothing expires plans
on a timer.
"""

import logging
from datetime import timedelta

from modules.tokens.codec import TokenCodec
from modules.tokens.exceptions import TokenError
from modules.tokens.models import TokenPurpose
from modules.users.exceptions import ConcurrentUpdateError, UserNotFoundError
from modules.users.interfaces import IUserStore
from modules.users.models import LedgerEntry, UserRecord

from .exceptions import (
    InsufficientBalanceError,
    NoActivePlanError,
    PlanAlreadyOwnedError,
    PlanMisconfiguredError,
    PlanNotFoundError,
)
from .interfaces import IEntitlementService, IPlanCatalog
from .models import Plan, PurchaseResult

logger = logging.getLogger(__name__)


class PlanEntitlementService(IEntitlementService):
    """Purchases plans and evaluates whether a user's plan is still active."""

    def __init__(self, users: IUserStore, plans: IPlanCatalog, codec: TokenCodec):
        self._users = users
        self._plans = plans
        self._codec = codec

    async def purchase(self, user_email: str, plan_id: str) -> PurchaseResult:
        user = self._users.get_by_email(user_email)
        if user is None:
            raise UserNotFoundError(user_email)

        if user.plan_id:
            if self._validity_holds(user):
                raise PlanAlreadyOwnedError(user.plan_id)
            self._clear_plan(user)

        plan = self._plans.get_by_id(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)

        if not user.balance > plan.price:
            raise InsufficientBalanceError(plan.price, user.balance, user_id=user.id)

        validity = self._codec.issue(
            user.email,
            TokenPurpose.PLAN_VALIDITY,
            timedelta(days=plan.validity_days),
            data={"plan_id": plan.id},
        )
        entry = LedgerEntry(label=plan.name, amount=plan.price, created_at=self._codec.now())

        user.balance = user.balance - plan.price
        user.plan_id = plan.id
        user.plan_validity_token = validity.token
        user.plan_purchases = [*user.plan_purchases, entry]
        saved = self._users.save(user)

        logger.info("User %s bought plan %s until %s", saved.id, plan.id, validity.claim.expires_at)
        return PurchaseResult(
            plan=plan,
            balance=saved.balance,
            expires_at=validity.claim.expires_at,
            purchase=entry,
        )

    async def is_active(self, user: UserRecord) -> bool:
        if not user.plan_id:
            return False
        if self._validity_holds(user):
            return True
        self._persist_cleared(user)
        return False

    async def get_active_plan(self, user: UserRecord) -> tuple[UserRecord, Plan]:
        if not user.plan_id:
            raise NoActivePlanError(user.id)

        plan = self._plans.get_by_id(user.plan_id) if self._validity_holds(user) else None
        if plan is None:
            # Lapsed validity, or the plan was removed from the catalog
            self._persist_cleared(user)
            raise NoActivePlanError(user.id)

        if plan.per_click_reward is None or plan.per_click_reward <= 0:
            raise PlanMisconfiguredError(plan.id)

        return user, plan

    def _validity_holds(self, user: UserRecord) -> bool:
        if not user.plan_validity_token:
            return False
        try:
            claim = self._codec.verify(user.plan_validity_token, TokenPurpose.PLAN_VALIDITY)
        except TokenError:
            return False
        return claim.sub == user.email and claim.data.get("plan_id") == user.plan_id

    def _clear_plan(self, user: UserRecord) -> UserRecord:
        logger.info("Clearing lapsed plan %s from user %s", user.plan_id, user.id)
        user.plan_id = None
        user.plan_validity_token = None
        return user

    def _persist_cleared(self, user: UserRecord) -> None:
        """Save the cleared assignment; a concurrent writer wins the race."""
        try:
            self._users.save(self._clear_plan(user))
        except ConcurrentUpdateError:
            logger.warning("Version conflict clearing lapsed plan for user %s", user.id)
