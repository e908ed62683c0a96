"""
Fixtures for HTTP-level tests.

The app's service container is replaced with one built on the in-memory
stores and the shared fake clock.
"""

import pytest
from fastapi.testclient import TestClient

from api import app
from api.dependencies import ServiceContainer, get_container
from shared.config import Settings


@pytest.fixture
def api_settings(frontend_url) -> Settings:
    return Settings(
        _env_file=None,
        token_secret="test-secret-key-for-testing-only",
        app_env="development",
        frontend_url=frontend_url,
        password_hash_rounds=4,
    )


@pytest.fixture
def container(api_settings, users, plans, works, grants, funds, mailer, clock) -> ServiceContainer:
    return ServiceContainer(
        api_settings,
        users=users,
        plans=plans,
        works=works,
        grants=grants,
        funds=funds,
        mailer=mailer,
        clock=clock,
    )


@pytest.fixture
def client(container):
    app.dependency_overrides[get_container] = lambda: container
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def logged_in(client, verified_user, test_password):
    """Client holding a session cookie for verified_user."""
    response = client.post(
        "/api/auth/login",
        json={"email": verified_user.email, "password": test_password},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def as_admin(client, admin_user, test_password):
    """Client holding a session cookie for admin_user."""
    response = client.post(
        "/api/auth/admin",
        json={"email": admin_user.email, "password": test_password},
    )
    assert response.status_code == 200
    return client
