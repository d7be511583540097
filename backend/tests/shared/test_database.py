"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from shared.database import (
    get_supabase_client,
    get_supabase_user_client,
    reset_client_cache,
)


class TestSupabaseClient:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_uses_service_role_key(self, mock_settings, mock_create):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "service-key"

        get_supabase_client()

        mock_create.assert_called_once_with("https://test.supabase.co", "service-key")

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_client_is_cached_until_reset(self, mock_settings, mock_create):
        """The service client is built once and rebuilt after reset_client_cache."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "service-key"
        mock_create.side_effect = [MagicMock(name="first"), MagicMock(name="second")]

        first = get_supabase_client()
        assert get_supabase_client() is first
        assert mock_create.call_count == 1

        reset_client_cache()
        assert get_supabase_client() is not first
        assert mock_create.call_count == 2

    @pytest.mark.parametrize("url,key", [
        ("", ""),
        ("", "service-key"),
        ("https://test.supabase.co", ""),
    ])
    @patch("shared.database.get_settings")
    def test_raises_without_config(self, mock_settings, url, key):
        mock_settings.return_value.supabase_url = url
        mock_settings.return_value.supabase_service_role_key = key

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_supabase_client()


class TestSupabaseUserClient:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_binds_session_to_access_token(self, mock_settings, mock_create):
        """User client uses the anon key and the caller's JWT."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "anon-key"
        mock_client = MagicMock()
        mock_create.return_value = mock_client

        client = get_supabase_user_client("user-access-token")

        mock_create.assert_called_once_with("https://test.supabase.co", "anon-key")
        mock_client.auth.set_session.assert_called_once_with("user-access-token", "")
        assert client is mock_client

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_not_cached(self, mock_settings, mock_create):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "anon-key"

        get_supabase_user_client("a")
        get_supabase_user_client("b")

        assert mock_create.call_count == 2

    @patch("shared.database.get_settings")
    def test_raises_without_anon_key(self, mock_settings):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = ""

        with pytest.raises(RuntimeError, match="SUPABASE_ANON_KEY"):
            get_supabase_user_client("token")
