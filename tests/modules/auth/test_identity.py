"""Tests for identity resolution and tier precedence."""

import pytest
from tests.conftest import TEST_ADMIN_KEY, create_test_token

from modules.auth.exceptions import ExpiredTokenError
from modules.auth.identity import IdentityResolver
from modules.auth.models import ANONYMOUS, AdminIdentity, AuthenticatedIdentity, TrustTier


class TestResolve:
    @pytest.mark.asyncio
    async def test_no_credentials_is_anonymous(self, resolver):
        assert await resolver.resolve() == ANONYMOUS

    @pytest.mark.asyncio
    async def test_token_is_authenticated(self, resolver):
        identity = await resolver.resolve(bearer_token=create_test_token(user_id="u1"))
        assert isinstance(identity, AuthenticatedIdentity)
        assert identity.subject_id == "u1"

    @pytest.mark.asyncio
    async def test_admin_key_is_admin(self, resolver):
        identity = await resolver.resolve(api_key=TEST_ADMIN_KEY)
        assert isinstance(identity, AdminIdentity)
        assert identity.tier is TrustTier.ADMIN

    @pytest.mark.asyncio
    async def test_admin_takes_precedence_over_token(self, resolver):
        identity = await resolver.resolve(
            bearer_token=create_test_token(), api_key=TEST_ADMIN_KEY
        )
        assert isinstance(identity, AdminIdentity)

    @pytest.mark.asyncio
    async def test_wrong_key_falls_back_to_token(self, resolver):
        identity = await resolver.resolve(
            bearer_token=create_test_token(user_id="u1"), api_key="guess"
        )
        assert isinstance(identity, AuthenticatedIdentity)

    @pytest.mark.asyncio
    async def test_wrong_key_alone_is_anonymous(self, resolver):
        assert await resolver.resolve(api_key="guess") == ANONYMOUS

    @pytest.mark.asyncio
    async def test_invalid_token_raises(self, resolver):
        with pytest.raises(ExpiredTokenError):
            await resolver.resolve(bearer_token=create_test_token(expired=True))

    def test_admin_key_not_in_repr(self):
        assert TEST_ADMIN_KEY not in repr(AdminIdentity(key=TEST_ADMIN_KEY))


class TestAdminKeyConfiguration:
    def test_empty_configured_key_disables_admin(self, resolver):
        disabled = IdentityResolver(resolver._auth, admin_api_key="")
        assert disabled.is_admin_key("") is False
        assert disabled.is_admin_key("anything") is False

    @pytest.mark.asyncio
    async def test_key_is_fixed_at_construction(self, resolver, monkeypatch):
        monkeypatch.setenv("ADMIN_API_KEY", "rotated")
        assert isinstance(await resolver.resolve(api_key=TEST_ADMIN_KEY), AdminIdentity)
        assert await resolver.resolve(api_key="rotated") == ANONYMOUS
