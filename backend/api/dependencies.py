"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Configuration (including the token signing secret) is handed to each
component at construction; no module reads it from a global.
"""

from typing import TYPE_CHECKING, Optional

from fastapi import Depends

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, ICapabilityService
    from modules.auth.passwords import PasswordHasher
    from modules.earnings.interfaces import ICooldownService, IClickGrantStore, IWorkStore
    from modules.funds.interfaces import IFundsService, IFundsStore
    from modules.notifications.interfaces import IMailer
    from modules.plans.interfaces import IEntitlementService, IPlanStore
    from modules.tokens.codec import Clock, TokenCodec
    from modules.users.interfaces import IUserStore


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    Stores and the mailer may be supplied up front (tests pass in-memory
    fakes); anything not supplied is built from settings on first use.
    Use reset() to clear all cached services.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        users: "IUserStore | None" = None,
        plans: "IPlanStore | None" = None,
        works: "IWorkStore | None" = None,
        grants: "IClickGrantStore | None" = None,
        funds: "IFundsStore | None" = None,
        mailer: "IMailer | None" = None,
        clock: "Clock | None" = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._clock = clock
        self._provided = {
            "users": users,
            "plans": plans,
            "works": works,
            "grants": grants,
            "funds": funds,
            "mailer": mailer,
        }
        self.reset()

    # -------------------------------------------------------------------------
    # Infrastructure
    # -------------------------------------------------------------------------

    @property
    def codec(self) -> "TokenCodec":
        """Get the token codec, keyed with the configured secret."""
        if self._codec is None:
            from modules.tokens.codec import TokenCodec
            self._codec = TokenCodec(
                self.settings.token_secret,
                algorithm=self.settings.token_algorithm,
                clock=self._clock,
            )
        return self._codec

    @property
    def passwords(self) -> "PasswordHasher":
        if self._passwords is None:
            from modules.auth.passwords import PasswordHasher
            self._passwords = PasswordHasher(rounds=self.settings.password_hash_rounds)
        return self._passwords

    @property
    def mailer(self) -> "IMailer":
        if self._mailer is None:
            from modules.notifications.mailer import ResendMailer
            self._mailer = ResendMailer(
                api_key=self.settings.resend_api_key,
                from_email=self.settings.mail_from,
                max_attempts=self.settings.mail_max_attempts,
                backoff_seconds=self.settings.mail_retry_backoff_seconds,
            )
        return self._mailer

    # -------------------------------------------------------------------------
    # Stores
    # -------------------------------------------------------------------------

    @property
    def users(self) -> "IUserStore":
        if self._users is None:
            from modules.users.repository import UserRepository
            from shared.database import get_supabase_client
            self._users = UserRepository(get_supabase_client())
        return self._users

    @property
    def plans(self) -> "IPlanStore":
        if self._plans is None:
            from modules.plans.repository import PlanRepository
            from shared.database import get_supabase_client
            self._plans = PlanRepository(get_supabase_client())
        return self._plans

    @property
    def works(self) -> "IWorkStore":
        if self._works is None:
            from modules.earnings.repository import WorkRepository
            from shared.database import get_supabase_client
            self._works = WorkRepository(get_supabase_client())
        return self._works

    @property
    def grants(self) -> "IClickGrantStore":
        if self._grants is None:
            from modules.earnings.repository import ClickAdRepository
            from shared.database import get_supabase_client
            self._grants = ClickAdRepository(get_supabase_client())
        return self._grants

    @property
    def funds(self) -> "IFundsStore":
        if self._funds is None:
            from modules.funds.repository import FundsRepository
            from shared.database import get_supabase_client
            self._funds = FundsRepository(get_supabase_client())
        return self._funds

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def capabilities(self) -> "ICapabilityService":
        """Get the capability token issuer."""
        if self._capabilities is None:
            from modules.auth.capabilities import CapabilityTokenIssuer
            self._capabilities = CapabilityTokenIssuer(
                users=self.users,
                codec=self.codec,
                passwords=self.passwords,
                base_url=self.settings.frontend_url,
                verification_ttl_minutes=self.settings.verification_token_ttl_minutes,
                resend_verification_ttl_minutes=self.settings.resend_verification_ttl_minutes,
                reset_ttl_minutes=self.settings.reset_token_ttl_minutes,
                app_name=self.settings.app_name.removesuffix(" API"),
            )
        return self._capabilities

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth is None:
            from modules.auth.service import AuthService
            self._auth = AuthService(
                users=self.users,
                codec=self.codec,
                passwords=self.passwords,
                capabilities=self.capabilities,
                session_ttl_seconds=self.settings.session_token_ttl_seconds,
                app_name=self.settings.app_name.removesuffix(" API"),
            )
        return self._auth

    @property
    def entitlements(self) -> "IEntitlementService":
        """Get the plan entitlement service instance."""
        if self._entitlements is None:
            from modules.plans.service import PlanEntitlementService
            self._entitlements = PlanEntitlementService(
                users=self.users,
                plans=self.plans,
                codec=self.codec,
            )
        return self._entitlements

    @property
    def cooldowns(self) -> "ICooldownService":
        """Get the ad-click cooldown guard instance."""
        if self._cooldowns is None:
            from modules.earnings.service import AdClickCooldownGuard
            self._cooldowns = AdClickCooldownGuard(
                users=self.users,
                works=self.works,
                grants=self.grants,
                entitlements=self.entitlements,
                codec=self.codec,
                cooldown_seconds=self.settings.click_cooldown_seconds,
            )
        return self._cooldowns

    @property
    def funds_service(self) -> "IFundsService":
        """Get the deposit and cash-out service instance."""
        if self._funds_service is None:
            from modules.funds.service import FundsService
            self._funds_service = FundsService(
                users=self.users,
                store=self.funds,
                clock=self._clock,
            )
        return self._funds_service

    def reset(self) -> None:
        """
        Reset all cached services.

        Stores supplied at construction are kept.
        """
        self._codec = None
        self._passwords = None
        self._mailer = self._provided["mailer"]
        self._users = self._provided["users"]
        self._plans = self._provided["plans"]
        self._works = self._provided["works"]
        self._grants = self._provided["grants"]
        self._funds = self._provided["funds"]
        self._capabilities = None
        self._auth = None
        self._entitlements = None
        self._cooldowns = None
        self._funds_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_app_settings(container: ServiceContainer = Depends(get_container)) -> Settings:
    """FastAPI dependency for the container's settings."""
    return container.settings


def get_auth_service(container: ServiceContainer = Depends(get_container)) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return container.auth


def get_capability_service(
    container: ServiceContainer = Depends(get_container),
) -> "ICapabilityService":
    """FastAPI dependency for the capability token issuer."""
    return container.capabilities


def get_entitlement_service(
    container: ServiceContainer = Depends(get_container),
) -> "IEntitlementService":
    """FastAPI dependency for plan entitlement service."""
    return container.entitlements


def get_cooldown_service(
    container: ServiceContainer = Depends(get_container),
) -> "ICooldownService":
    """FastAPI dependency for the ad-click cooldown guard."""
    return container.cooldowns


def get_funds_service(
    container: ServiceContainer = Depends(get_container),
) -> "IFundsService":
    """FastAPI dependency for the deposit and cash-out service."""
    return container.funds_service


def get_user_store(container: ServiceContainer = Depends(get_container)) -> "IUserStore":
    """FastAPI dependency for user records (admin user management)."""
    return container.users


def get_plan_store(container: ServiceContainer = Depends(get_container)) -> "IPlanStore":
    """FastAPI dependency for the plan catalog."""
    return container.plans


def get_work_store(container: ServiceContainer = Depends(get_container)) -> "IWorkStore":
    """FastAPI dependency for the work catalog."""
    return container.works


def get_mailer(container: ServiceContainer = Depends(get_container)) -> "IMailer":
    """FastAPI dependency for the mailer."""
    return container.mailer
