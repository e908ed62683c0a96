"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
a controllable clock, the token codec, in-memory stores and the services
wired on top of them.
"""

from decimal import Decimal

import pytest

from api.dependencies import reset_container
from modules.auth.capabilities import CapabilityTokenIssuer
from modules.auth.passwords import PasswordHasher
from modules.auth.service import AuthService
from modules.earnings.models import Work
from modules.earnings.service import AdClickCooldownGuard
from modules.funds.service import FundsService
from modules.plans.models import Plan
from modules.plans.service import PlanEntitlementService
from modules.users.models import UserRole
from modules.tokens.codec import TokenCodec
from shared.config import get_settings

from tests.fakes import (
    FakeClock,
    InMemoryClickGrantStore,
    InMemoryFundsStore,
    InMemoryPlanCatalog,
    InMemoryUserStore,
    InMemoryWorkCatalog,
    RecordingMailer,
)

# Token secret (only for testing)
TEST_SECRET = "test-secret-key-for-testing-only"
TEST_PASSWORD = "secret123"
FRONTEND_URL = "http://localhost:5173"

DAILY = 24 * 60 * 60


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def codec(clock: FakeClock) -> TokenCodec:
    return TokenCodec(TEST_SECRET, clock=clock)


@pytest.fixture(scope="session")
def passwords() -> PasswordHasher:
    """Cheapest bcrypt cost, to keep tests fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture(scope="session")
def password_hash(passwords: PasswordHasher) -> str:
    return passwords.hash(TEST_PASSWORD)


@pytest.fixture
def users() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def basic_plan() -> Plan:
    return Plan(
        id="plan-basic",
        name="Basic",
        price=Decimal("60"),
        validity_days=30,
        per_click_reward=Decimal("5"),
    )


@pytest.fixture
def plans(basic_plan: Plan) -> InMemoryPlanCatalog:
    return InMemoryPlanCatalog([basic_plan])


@pytest.fixture
def work() -> Work:
    return Work(id="ad-1", name="Watch ad 1", link="https://ads.example.com/1")


@pytest.fixture
def works(work: Work) -> InMemoryWorkCatalog:
    return InMemoryWorkCatalog([work, Work(id="ad-2", name="Watch ad 2")])


@pytest.fixture
def grants() -> InMemoryClickGrantStore:
    return InMemoryClickGrantStore()


@pytest.fixture
def funds() -> InMemoryFundsStore:
    return InMemoryFundsStore()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def capabilities(users, codec, passwords) -> CapabilityTokenIssuer:
    return CapabilityTokenIssuer(users=users, codec=codec, passwords=passwords, base_url=FRONTEND_URL)


@pytest.fixture
def auth_service(users, codec, passwords, capabilities) -> AuthService:
    return AuthService(users=users, codec=codec, passwords=passwords, capabilities=capabilities)


@pytest.fixture
def entitlements(users, plans, codec) -> PlanEntitlementService:
    return PlanEntitlementService(users=users, plans=plans, codec=codec)


@pytest.fixture
def cooldowns(users, works, grants, entitlements, codec) -> AdClickCooldownGuard:
    return AdClickCooldownGuard(
        users=users,
        works=works,
        grants=grants,
        entitlements=entitlements,
        codec=codec,
        cooldown_seconds=DAILY,
    )


@pytest.fixture
def funds_service(users, funds, clock) -> FundsService:
    return FundsService(users=users, store=funds, clock=clock)


@pytest.fixture
def test_password() -> str:
    return TEST_PASSWORD


@pytest.fixture
def frontend_url() -> str:
    return FRONTEND_URL


@pytest.fixture
def verified_user(users, password_hash):
    """A verified user with enough balance to buy the basic plan."""
    return users.add(
        email="user@example.com",
        user_name="user",
        password_hash=password_hash,
        balance=Decimal("100"),
    )


@pytest.fixture
def admin_user(users, password_hash):
    return users.add(
        email="admin@example.com",
        user_name="admin",
        password_hash=password_hash,
        role=UserRole.ADMIN,
    )
