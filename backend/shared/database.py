"""
Supabase client factory.

The service-role client backs profile, credit and persona storage writes
made on behalf of users (admin uploads, profile creation). The user client
is for reads that should go through Row Level Security.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get the cached Supabase client authenticated with the service role key.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset.
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_supabase_user_client(access_token: str) -> Client:
    """
    Get a Supabase client acting as the user who owns ``access_token``.

    Not cached: every call builds a fresh client bound to that session.
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )

    client = create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
    )
    # No refresh token on the backend; the session lives as long as the JWT.
    client.auth.set_session(access_token, "")
    return client


def reset_client_cache() -> None:
    """Drop the cached service client (tests, configuration changes)."""
    global _service_client
    _service_client = None
