"""Tests for single-use verification and reset links."""

import pytest
from datetime import timedelta

from modules.auth.capabilities import create_activation_code
from modules.auth.exceptions import (
    CapabilityConsumedError,
    InvalidActivationCodeError,
    WeakPasswordError,
)
from modules.tokens.exceptions import ExpiredTokenError, InvalidTokenError
from modules.tokens.models import TokenPurpose
from modules.tokens.transport import to_path_segment


def segment_of(link: str) -> str:
    return link.rsplit("/", 1)[1]


@pytest.fixture
def unverified_user(users, password_hash):
    return users.add(
        email="new@example.com",
        user_name="new",
        password_hash=password_hash,
        verified=False,
    )


class TestVerificationLink:
    @pytest.mark.asyncio
    async def test_link_shape(self, capabilities, unverified_user, frontend_url):
        user, link = await capabilities.issue_verification_link(unverified_user)

        assert link.link.startswith(f"{frontend_url}/login/")
        assert "." not in segment_of(link.link)
        assert user.verification_token_id is not None
        assert user.activation_code == link.code

    @pytest.mark.asyncio
    async def test_redeem_marks_verified(self, capabilities, users, unverified_user):
        _, link = await capabilities.issue_verification_link(unverified_user)

        user = await capabilities.redeem_verification(segment_of(link.link))

        assert user.verified is True
        stored = users.get_by_email(unverified_user.email)
        assert stored.verified is True
        assert stored.verification_token_id is None
        assert stored.activation_code is None

    @pytest.mark.asyncio
    async def test_link_works_once(self, capabilities, unverified_user):
        _, link = await capabilities.issue_verification_link(unverified_user)
        await capabilities.redeem_verification(segment_of(link.link))

        with pytest.raises(CapabilityConsumedError):
            await capabilities.redeem_verification(segment_of(link.link))

    @pytest.mark.asyncio
    async def test_reissue_supersedes_older_link(self, capabilities, users, unverified_user):
        user, first = await capabilities.issue_verification_link(unverified_user)
        _, second = await capabilities.issue_verification_link(user)

        with pytest.raises(CapabilityConsumedError):
            await capabilities.redeem_verification(segment_of(first.link))
        await capabilities.redeem_verification(segment_of(second.link))

    @pytest.mark.asyncio
    async def test_expired_link(self, capabilities, clock, unverified_user):
        _, link = await capabilities.issue_verification_link(unverified_user)
        clock.advance(minutes=15)

        with pytest.raises(ExpiredTokenError):
            await capabilities.redeem_verification(segment_of(link.link))

    @pytest.mark.asyncio
    async def test_reset_token_cannot_verify(self, capabilities, users, codec, unverified_user):
        """A reset link for the same user must not activate the account."""
        user, _ = await capabilities.issue_verification_link(unverified_user)
        issued = codec.issue(user.email, TokenPurpose.PASSWORD_RESET, timedelta(minutes=30))

        with pytest.raises(InvalidTokenError):
            await capabilities.redeem_verification(to_path_segment(issued.token))
        assert users.get_by_email(user.email).verified is False

    @pytest.mark.asyncio
    async def test_raw_jwt_is_not_a_path_segment(self, capabilities, unverified_user):
        _, link = await capabilities.issue_verification_link(unverified_user)
        raw = segment_of(link.link).replace("~", ".")

        with pytest.raises(InvalidTokenError):
            await capabilities.redeem_verification(raw)


class TestRequestVerification:
    @pytest.mark.asyncio
    async def test_resend_uses_longer_lifetime(self, capabilities, users, codec, clock, unverified_user):
        message = await capabilities.request_verification(unverified_user.email)

        assert message is not None
        stored = users.get_by_email(unverified_user.email)
        assert stored.activation_code in message.html

        clock.advance(minutes=20)
        segment = message.html.split("/login/", 1)[1].split('"', 1)[0]
        await capabilities.redeem_verification(segment)

    @pytest.mark.asyncio
    async def test_silent_for_unknown_email(self, capabilities):
        assert await capabilities.request_verification("ghost@example.com") is None

    @pytest.mark.asyncio
    async def test_silent_for_verified_user(self, capabilities, verified_user):
        assert await capabilities.request_verification(verified_user.email) is None


class TestActivationCode:
    @pytest.mark.asyncio
    async def test_activate_with_code(self, capabilities, unverified_user):
        _, link = await capabilities.issue_verification_link(unverified_user)

        user = await capabilities.activate_with_code("NEW@example.com", link.code)

        assert user.verified is True
        assert user.activation_code is None

    @pytest.mark.asyncio
    async def test_code_consumes_link(self, capabilities, unverified_user):
        _, link = await capabilities.issue_verification_link(unverified_user)
        await capabilities.activate_with_code(unverified_user.email, link.code)

        with pytest.raises(CapabilityConsumedError):
            await capabilities.redeem_verification(segment_of(link.link))

    @pytest.mark.asyncio
    async def test_wrong_code(self, capabilities, unverified_user):
        _, link = await capabilities.issue_verification_link(unverified_user)
        wrong = "000000" if link.code != "000000" else "111111"

        with pytest.raises(InvalidActivationCodeError):
            await capabilities.activate_with_code(unverified_user.email, wrong)

    @pytest.mark.asyncio
    async def test_unknown_email(self, capabilities):
        with pytest.raises(InvalidActivationCodeError):
            await capabilities.activate_with_code("ghost@example.com", "123456")

    def test_code_is_six_digits(self):
        for _ in range(20):
            code = create_activation_code()
            assert len(code) == 6 and code.isdigit()


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_reset_flow(self, capabilities, users, passwords, verified_user, frontend_url):
        message = await capabilities.request_password_reset(verified_user.email)
        assert message is not None
        assert f"{frontend_url}/resetpassword/" in message.html

        segment = message.html.split("/resetpassword/", 1)[1].split('"', 1)[0]
        await capabilities.redeem_reset(segment, "brand-new")

        stored = users.get_by_email(verified_user.email)
        assert passwords.verify("brand-new", stored.password_hash)
        assert stored.reset_token_id is None

    @pytest.mark.asyncio
    async def test_reset_link_works_once(self, capabilities, verified_user):
        _, link = await capabilities.issue_reset_link(verified_user)
        await capabilities.redeem_reset(segment_of(link), "brand-new")

        with pytest.raises(CapabilityConsumedError):
            await capabilities.redeem_reset(segment_of(link), "another-one")

    @pytest.mark.asyncio
    async def test_reset_link_expires(self, capabilities, clock, verified_user):
        _, link = await capabilities.issue_reset_link(verified_user)
        clock.advance(minutes=31)

        with pytest.raises(ExpiredTokenError):
            await capabilities.redeem_reset(segment_of(link), "brand-new")

    @pytest.mark.asyncio
    async def test_short_password_keeps_link_usable(self, capabilities, verified_user):
        _, link = await capabilities.issue_reset_link(verified_user)

        with pytest.raises(WeakPasswordError):
            await capabilities.redeem_reset(segment_of(link), "123")
        await capabilities.redeem_reset(segment_of(link), "brand-new")

    @pytest.mark.asyncio
    async def test_silent_for_unknown_email(self, capabilities):
        assert await capabilities.request_password_reset("ghost@example.com") is None

    @pytest.mark.asyncio
    async def test_verification_link_cannot_reset(self, capabilities, users, verified_user, password_hash):
        _, link = await capabilities.issue_verification_link(verified_user)

        with pytest.raises(InvalidTokenError):
            await capabilities.redeem_reset(segment_of(link.link), "brand-new")
        assert users.get_by_email(verified_user.email).password_hash == password_hash
