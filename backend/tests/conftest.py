"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

from datetime import datetime, timezone, timedelta
from typing import Any

import pytest
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.profiles.models import UserProfile
from shared.config import get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    full_name: str | None = None,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        full_name: Optional display name in user_metadata

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    if full_name:
        payload["user_metadata"] = {"full_name": full_name}
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def make_profile(**overrides: Any) -> UserProfile:
    """Build a profile with sensible defaults."""
    data: dict[str, Any] = {
        "id": "test-user-123",
        "email": "test@example.com",
        "name": "Test User",
        "role": "user",
        "credits": {"chat": 0, "audio": 0, "video": 0},
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    data.update(overrides)
    return UserProfile(**data)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and client cache before and after each test."""
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()
    yield
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
