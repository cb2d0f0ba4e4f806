"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from totem.config import Settings
from totem.domain.error import UnauthenticatedError
from totem.domain.service import JWTService
from totem.util.jwt import create_token
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestIdentify:
    """Tests for resolving a token to a user."""

    @pytest.mark.asyncio
    async def test_valid_token_resolves_user(self, unit_env):
        """A token minted for a user resolves back to that user."""
        jwt_service = await unit_env.get(JWTService)
        token = create_token("alice", Settings().auth)

        assert jwt_service.identify(token) == "alice"
        assert jwt_service.current_user_id(token) == "alice"

    @pytest.mark.asyncio
    async def test_missing_token_is_signed_out(self, unit_env):
        """No token means no user."""
        jwt_service = await unit_env.get(JWTService)

        assert jwt_service.identify(None) is None
        assert jwt_service.identify("") is None

    @pytest.mark.asyncio
    async def test_expired_token_is_signed_out(self, unit_env):
        """A token past its expiry no longer identifies anyone."""
        jwt_service = await unit_env.get(JWTService)
        auth = Settings().auth
        issued = datetime.now(timezone.utc) - timedelta(days=auth.jwt_expiry_days + 1)

        assert jwt_service.identify(create_token("alice", auth, issued)) is None

    @pytest.mark.asyncio
    async def test_token_without_subject_is_signed_out(self, unit_env):
        """Tokens from other issuers that lack a subject are rejected."""
        jwt_service = await unit_env.get(JWTService)
        auth = Settings().auth
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            auth.jwt_secret,
            algorithm=auth.jwt_algorithm,
        )

        assert jwt_service.identify(token) is None


class TestCurrentUserId:
    """Tests for requiring a signed-in user."""

    @pytest.mark.asyncio
    async def test_missing_token_raises(self, unit_env):
        jwt_service = await unit_env.get(JWTService)

        with pytest.raises(UnauthenticatedError):
            jwt_service.current_user_id(None)

    @pytest.mark.asyncio
    async def test_garbage_token_names_the_action(self, unit_env):
        """The error says what the user was trying to do."""
        jwt_service = await unit_env.get(JWTService)

        with pytest.raises(UnauthenticatedError, match="like a label"):
            jwt_service.current_user_id("not-a-jwt", action="like a label")
