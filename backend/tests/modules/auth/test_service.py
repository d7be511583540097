import pytest
from unittest.mock import patch, AsyncMock, MagicMock
import jwt
from datetime import datetime, timedelta, timezone

from modules.auth.service import AuthService
from modules.auth.exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
)
from modules.profiles.exceptions import ProfileAlreadyExistsError
from shared.models import UserRole
from tests.conftest import make_profile


def _token(secret="test-secret", expired=False, **claims):
    now = datetime.now(timezone.utc)
    payload = {
        "sub": "user-123",
        "email": "test@example.com",
        "exp": now - timedelta(hours=1) if expired else now + timedelta(hours=1),
        "iat": now - timedelta(hours=2) if expired else now,
        "aud": "authenticated",
        "role": "authenticated",
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


class TestAuthService:
    @pytest.fixture
    def profiles(self):
        profiles = MagicMock()
        profiles.get_profile = AsyncMock(return_value=make_profile(id="user-123"))
        profiles.create_profile = AsyncMock()
        profiles.get_profile_by_email = AsyncMock(return_value=None)
        return profiles

    @pytest.fixture
    def service(self, profiles):
        """Create auth service with mocked dependencies."""
        with patch("modules.auth.service.get_settings") as mock_settings:
            mock_settings.return_value.supabase_jwt_secret = "test-secret"
            yield AuthService(profiles)

    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service):
        user = await service.validate_token(_token())
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.role == UserRole.USER

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service):
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(_token(expired=True))

    @pytest.mark.asyncio
    async def test_validate_invalid_token(self, service):
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    async def test_validate_wrong_secret(self, service):
        with pytest.raises(InvalidTokenError):
            await service.validate_token(_token(secret="other-secret"))

    @pytest.mark.asyncio
    async def test_validate_wrong_audience(self, service):
        with pytest.raises(InvalidTokenError):
            await service.validate_token(_token(aud="anon"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", None])
    async def test_validate_missing_token(self, service, token):
        with pytest.raises(MissingTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_unconfigured_secret(self, profiles):
        with patch("modules.auth.service.get_settings") as mock_settings:
            mock_settings.return_value.supabase_jwt_secret = ""
            service = AuthService(profiles)

        with pytest.raises(InvalidTokenError, match="not configured"):
            await service.validate_token(_token())

    @pytest.mark.asyncio
    async def test_authenticate_uses_stored_role(self, service, profiles):
        profiles.get_profile.return_value = make_profile(id="user-123", role="admin")

        user = await service.authenticate(_token())

        assert user.role == UserRole.ADMIN
        profiles.create_profile.assert_not_called()

    @pytest.mark.asyncio
    async def test_authenticate_creates_profile_on_first_sign_in(self, service, profiles):
        profiles.get_profile.return_value = None
        profiles.create_profile.return_value = make_profile(id="user-123")

        user = await service.authenticate(_token(user_metadata={"full_name": "Test Person"}))

        profiles.create_profile.assert_awaited_once_with(
            "user-123", "test@example.com", "Test Person"
        )
        assert user.role == UserRole.USER

    @pytest.mark.asyncio
    async def test_authenticate_concurrent_creation(self, service, profiles):
        """A profile created between the read and the insert is re-read."""
        profiles.get_profile.side_effect = [None, make_profile(id="user-123", role="admin")]
        profiles.create_profile.side_effect = ProfileAlreadyExistsError("user-123")

        user = await service.authenticate(_token())

        assert user.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_authenticate_without_email(self, service, profiles):
        profiles.get_profile.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.authenticate(_token(email=None))

    @pytest.mark.asyncio
    async def test_get_user_by_email(self, service, profiles):
        assert await service.get_user_by_email("nobody@example.com") is None
        profiles.get_profile_by_email.assert_awaited_once_with("nobody@example.com")
