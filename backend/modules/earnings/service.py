"""
Ad-click cooldown guard.

Each (user, ad) pair is either ELIGIBLE (no live grant) or ON_COOLDOWN
(a grant whose signed cooldown token still verifies). Earning moves a
pair to ON_COOLDOWN; it returns to ELIGIBLE when the token expires. Stale
grants are reaped when next touched, or by sweep_expired().

Commit order for an earn:
1. conditional insert of the grant (the claim; loses cleanly on a race)
2. balance credit + ledger append in one compare-and-swap user save
If step 2 cannot be committed the grant is released, so a failed earn
never leaves the user locked out without having been paid.
"""

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from modules.plans.interfaces import IEntitlementService
from modules.tokens.codec import TokenCodec
from modules.tokens.exceptions import TokenError
from modules.tokens.models import TokenPurpose
from modules.users.exceptions import ConcurrentUpdateError, UserNotFoundError
from modules.users.interfaces import IUserStore
from modules.users.models import LedgerEntry, UserRecord

from .exceptions import AlreadyClaimedError, WorkNotFoundError
from .interfaces import ICooldownService, IClickGrantStore, IWorkCatalog
from .models import (
    ClickGrant,
    CooldownState,
    CooldownStatus,
    EarnResult,
    NewClickGrant,
)

logger = logging.getLogger(__name__)


class AdClickCooldownGuard(ICooldownService):
    """Grants per-click rewards, at most once per ad per cooldown window."""

    def __init__(
        self,
        users: IUserStore,
        works: IWorkCatalog,
        grants: IClickGrantStore,
        entitlements: IEntitlementService,
        codec: TokenCodec,
        cooldown_seconds: int,
        max_credit_attempts: int = 3,
    ):
        if cooldown_seconds <= 0:
            raise ValueError("Cooldown window must be positive")
        self._users = users
        self._works = works
        self._grants = grants
        self._entitlements = entitlements
        self._codec = codec
        self._cooldown = timedelta(seconds=cooldown_seconds)
        self._max_credit_attempts = max(1, max_credit_attempts)

    @property
    def cooldown(self) -> timedelta:
        return self._cooldown

    async def earn(self, user_email: str, ad_id: str, label: Optional[str] = None) -> EarnResult:
        user = self._users.get_by_email(user_email)
        if user is None:
            raise UserNotFoundError(user_email)

        user, plan = await self._entitlements.get_active_plan(user)
        reward = plan.per_click_reward

        work = self._works.get_by_id(ad_id)
        if work is None:
            raise WorkNotFoundError(ad_id)

        existing = self._grants.get(user.email, work.id)
        if existing is not None:
            if self._is_live(existing):
                raise AlreadyClaimedError(work.id, existing.expires_at)
            self._reap(existing)

        issued = self._codec.issue(
            user.email,
            TokenPurpose.CLICK_COOLDOWN,
            self._cooldown,
            data={"ad_id": work.id},
        )
        grant = self._grants.try_insert(
            NewClickGrant(
                user_email=user.email,
                ad_id=work.id,
                ad_name=work.name,
                token=issued.token,
                expires_at=issued.claim.expires_at,
            )
        )
        if grant is None:
            # Another request claimed the pair between our read and insert
            raise AlreadyClaimedError(work.id)

        try:
            user = self._credit(user, reward, label or work.name)
        except Exception:
            self._grants.delete_if_token(grant.user_email, grant.ad_id, grant.token)
            raise

        logger.info("User %s earned %s from ad %s", user.id, reward, work.id)
        return EarnResult(
            reward=reward,
            balance=user.balance,
            earnings=list(user.earnings),
            grant=grant,
        )

    async def list_grants(self, user_email: str, reap: bool = True) -> list[ClickGrant]:
        live = []
        for grant in self._grants.list_for_user(user_email):
            if self._is_live(grant):
                live.append(grant)
            elif reap:
                self._reap(grant)
        return live

    async def check(self, user_email: str, ad_id: str) -> CooldownStatus:
        grant = self._grants.get(user_email, ad_id)
        if grant is not None:
            if self._is_live(grant):
                return CooldownStatus(
                    ad_id=ad_id,
                    state=CooldownState.ON_COOLDOWN,
                    grant=grant,
                    available_at=grant.expires_at,
                )
            self._reap(grant)
        return CooldownStatus(ad_id=ad_id, state=CooldownState.ELIGIBLE)

    async def sweep_expired(self) -> int:
        removed = self._grants.delete_expired(self._codec.now())
        if removed:
            logger.info("Swept %d expired click grants", removed)
        return removed

    def _credit(self, user: UserRecord, reward: Decimal, label: str) -> UserRecord:
        """Add the reward and a ledger row, retrying on a lost version race."""
        attempt = 1
        while True:
            entry = LedgerEntry(label=label, amount=reward, created_at=self._codec.now())
            user.balance = user.balance + reward
            user.earnings = [*user.earnings, entry]
            try:
                return self._users.save(user)
            except ConcurrentUpdateError:
                if attempt >= self._max_credit_attempts:
                    raise
                logger.warning(
                    "Version conflict crediting user %s (attempt %d), reloading",
                    user.id, attempt,
                )
                attempt += 1
                fresh = self._users.get_by_email(user.email)
                if fresh is None:
                    raise UserNotFoundError(user.email)
                user = fresh

    def _is_live(self, grant: ClickGrant) -> bool:
        """A grant is live while its cooldown token verifies for this user and ad."""
        try:
            claim = self._codec.verify(grant.token, TokenPurpose.CLICK_COOLDOWN)
        except TokenError:
            return False
        return claim.sub == grant.user_email and claim.data.get("ad_id") == grant.ad_id

    def _reap(self, grant: ClickGrant) -> None:
        if self._grants.delete_if_token(grant.user_email, grant.ad_id, grant.token):
            logger.info("Reaped stale grant for ad %s (%s)", grant.ad_id, grant.user_email)
