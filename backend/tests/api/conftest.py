"""Fixtures for API tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi.testclient import TestClient

from api import app
from api.dependencies import (
    get_auth_service,
    get_credits_service,
    get_persona_service,
    get_profile_service,
)
from modules.auth.service import AuthService
from modules.personas.upload import PersonaUploadService
from tests.conftest import TEST_JWT_SECRET, create_test_token, make_profile


@pytest.fixture
def profile_store() -> dict:
    """Profiles by user ID, as the mocked profile service sees them."""
    return {
        "test-user-123": make_profile(id="test-user-123", email="test@example.com"),
        "admin-1": make_profile(id="admin-1", email="admin@example.com", role="admin"),
    }


@pytest.fixture
def profiles(profile_store):
    profiles = MagicMock()
    profiles.get_profile = AsyncMock(side_effect=lambda user_id: profile_store.get(user_id))
    profiles.get_profile_by_email = AsyncMock(return_value=None)
    profiles.create_profile = AsyncMock()
    profiles.update_profile = AsyncMock()
    profiles.update_birth_details = AsyncMock()
    profiles.record_terms_acceptance = AsyncMock()
    profiles.list_profiles = AsyncMock(side_effect=lambda limit, offset: list(profile_store.values()))
    return profiles


@pytest.fixture
def credits():
    credits = MagicMock()
    credits.get_credits = AsyncMock()
    credits.grant_credits = AsyncMock()
    return credits


@pytest.fixture
def personas():
    personas = MagicMock(spec=PersonaUploadService)
    personas.upload = AsyncMock()
    personas.remove_persona = AsyncMock()
    return personas


@pytest.fixture
def client(profiles, credits, personas):
    with patch("modules.auth.service.get_settings") as mock_settings:
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        auth = AuthService(profiles)

    app.dependency_overrides[get_auth_service] = lambda: auth
    app.dependency_overrides[get_profile_service] = lambda: profiles
    app.dependency_overrides[get_credits_service] = lambda: credits
    app.dependency_overrides[get_persona_service] = lambda: personas
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    token = create_test_token(user_id="admin-1", email="admin@example.com")
    return {"Authorization": f"Bearer {token}"}
