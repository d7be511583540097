"""
Tests for shared models.
"""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from shared.models import AuthenticatedUser, UserRole


class TestUserRole:
    def test_values(self):
        assert UserRole.USER.value == "user"
        assert UserRole.ADMIN.value == "admin"

    def test_compares_to_string(self):
        assert UserRole("admin") == "admin"


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    def test_default_values(self):
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        assert user.email_verified is False
        assert user.role == UserRole.USER
        assert user.last_sign_in is None

    def test_all_fields(self):
        now = datetime.now(timezone.utc)
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            email_verified=True,
            last_sign_in=now,
            role="admin",
        )
        assert user.role == UserRole.ADMIN
        assert user.last_sign_in == now

    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            AuthenticatedUser(id="user-123", email="not-an-email")

    def test_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            AuthenticatedUser(id="user-123", email="test@example.com", role="superuser")

    def test_is_frozen(self):
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        with pytest.raises(ValidationError):
            user.role = UserRole.ADMIN

    def test_ignores_extra_claims(self):
        user = AuthenticatedUser(id="user-123", email="test@example.com", aud="authenticated")
        assert not hasattr(user, "aud")
