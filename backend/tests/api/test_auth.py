"""
Tests for JWT authentication middleware.
"""

from tests.conftest import create_test_token


class TestAuthentication:
    def test_missing_auth_header(self, client):
        response = client.get("/api/users/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_valid_token(self, client, auth_headers):
        response = client.get("/api/users/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["id"] == "test-user-123"

    def test_expired_token(self, client):
        token = create_test_token(expired=True)
        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert "expired" in response.json()["detail"].lower()

    def test_invalid_token(self, client):
        response = client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_first_sign_in_creates_profile(self, client, profiles, profile_store):
        """A valid token with no profile yet creates one on the spot."""
        from tests.conftest import make_profile

        async def create(user_id, email, display_name=None):
            profile_store[user_id] = make_profile(id=user_id, email=email, name=display_name)
            return profile_store[user_id]

        profiles.create_profile.side_effect = create
        token = create_test_token(user_id="new-user", email="new@example.com", full_name="New Person")

        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["name"] == "New Person"
        assert response.json()["role"] == "user"


class TestRequireRole:
    def test_user_cannot_reach_admin_routes(self, client, auth_headers):
        response = client.get("/api/admin/users", headers=auth_headers)
        assert response.status_code == 403
        assert "admin" in response.json()["detail"]

    def test_admin_allowed(self, client, admin_headers):
        response = client.get("/api/admin/users", headers=admin_headers)
        assert response.status_code == 200

    def test_anonymous_gets_401_not_403(self, client):
        assert client.get("/api/admin/users").status_code == 401
