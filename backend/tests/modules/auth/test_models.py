import pytest
from decimal import Decimal

from modules.auth.models import AuthContext, ChangePasswordRequest, RegisterRequest
from modules.users.models import UserProfile, UserRole


def make_profile(role: UserRole = UserRole.USER) -> UserProfile:
    return UserProfile(
        id="user-123",
        name="Test User",
        user_name="test-user",
        email="user@example.com",
        role=role,
        verified=True,
        balance=Decimal("0"),
    )


class TestAuthContext:
    def test_context_is_immutable(self):
        """AuthContext should be immutable."""
        context = AuthContext(identity="user@example.com", profile=make_profile())
        with pytest.raises(Exception):  # Pydantic ValidationError
            context.identity = "other@example.com"

    def test_user_id_comes_from_profile(self):
        context = AuthContext(identity="user@example.com", profile=make_profile())
        assert context.user_id == "user-123"
        assert context.role == UserRole.USER
        assert not context.is_admin

    def test_admin(self):
        context = AuthContext(
            identity="user@example.com",
            role=UserRole.ADMIN,
            profile=make_profile(UserRole.ADMIN),
        )
        assert context.is_admin


class TestRequests:
    def test_register_accepts_camel_case(self):
        request = RegisterRequest.model_validate(
            {"name": "Ann", "userName": "ann", "email": "ann@example.com", "password": "secret1"}
        )
        assert request.user_name == "ann"

    def test_register_rejects_bad_email(self):
        with pytest.raises(Exception):
            RegisterRequest(name="Ann", user_name="ann", email="not-an-email", password="secret1")

    def test_register_requires_all_fields(self):
        with pytest.raises(Exception):
            RegisterRequest.model_validate({"name": "Ann", "email": "ann@example.com"})

    def test_change_password_aliases(self):
        request = ChangePasswordRequest.model_validate({"oldPassword": "a", "newPassword": "b"})
        assert request.old_password == "a"
        assert request.new_password == "b"
