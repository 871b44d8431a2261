"""Tests for the token verifier."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from tests.conftest import TEST_JWT_SECRET, create_test_token

from modules.auth.exceptions import (
    AuthNotConfiguredError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
)
from modules.auth.models import AuthenticatedIdentity
from modules.auth.service import AuthService
from shared.config import Settings


class TestAuthService:
    @pytest.fixture
    def service(self, settings):
        return AuthService(settings)

    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service):
        """Should return the verified subject and token claims."""
        token = create_test_token(
            user_id="user-123",
            email="test@example.com",
            user_metadata={"first_name": "Test", "last_name": "User"},
        )

        identity = await service.validate_token(token)

        assert isinstance(identity, AuthenticatedIdentity)
        assert identity.subject_id == "user-123"
        assert identity.claims.email == "test@example.com"
        assert identity.claims.first_name == "Test"
        assert identity.claims.last_name == "User"

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service):
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(create_test_token(expired=True))

    @pytest.mark.asyncio
    async def test_validate_wrong_secret(self, service):
        with pytest.raises(InvalidTokenError):
            await service.validate_token(create_test_token(secret="other-secret"))

    @pytest.mark.asyncio
    async def test_validate_malformed_token(self, service):
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    async def test_validate_missing_token(self, service):
        with pytest.raises(MissingTokenError):
            await service.validate_token("")

    @pytest.mark.asyncio
    async def test_validate_none_token(self, service):
        with pytest.raises(MissingTokenError):
            await service.validate_token(None)

    @pytest.mark.asyncio
    async def test_unconfigured_secret(self):
        service = AuthService(Settings(_env_file=None, supabase_jwt_secret=""))
        with pytest.raises(AuthNotConfiguredError):
            await service.validate_token(create_test_token())

    @pytest.mark.asyncio
    async def test_wrong_audience(self):
        service = AuthService(
            Settings(
                _env_file=None,
                supabase_jwt_secret=TEST_JWT_SECRET,
                supabase_jwt_audience="service",
            )
        )
        with pytest.raises(InvalidTokenError):
            await service.validate_token(create_test_token())


def _sign(**claims) -> str:
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    return jwt.encode({"exp": int(exp.timestamp()), **claims}, TEST_JWT_SECRET, algorithm="HS256")


class TestTokenClaimShapes:
    @pytest.fixture
    def service(self, settings):
        return AuthService(settings)

    @pytest.mark.asyncio
    async def test_audience_list(self, service):
        """An aud array containing the expected audience is accepted."""
        identity = await service.validate_token(_sign(sub="ext-001", aud=["authenticated"]))

        assert identity.subject_id == "ext-001"
        assert identity.claims.email is None

    @pytest.mark.asyncio
    async def test_null_metadata(self, service):
        token = _sign(
            sub="ext-002",
            aud="authenticated",
            email="a@example.com",
            user_metadata=None,
            app_metadata=None,
        )

        identity = await service.validate_token(token)

        assert identity.claims.email == "a@example.com"
        assert identity.claims.first_name is None

    @pytest.mark.asyncio
    async def test_wrongly_typed_claim_is_invalid_token(self, service):
        """A signed token with a malformed claim is a 401, not a crash."""
        token = _sign(sub="ext-003", aud="authenticated", email=123)

        with pytest.raises(InvalidTokenError) as exc_info:
            await service.validate_token(token)

        assert exc_info.value.status_code == 401
