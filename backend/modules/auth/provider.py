"""
Identity provider adapter and sign-out.

Google sign-in happens in the browser against Supabase Auth; this adapter
forwards the resulting auth-state changes as ``AuthStateEvent`` values.
"""

import logging
from typing import Any, Optional

from supabase import Client

from .exceptions import SignInError
from .interfaces import AuthStateCallback, IAuthProvider, Unsubscribe
from .models import AuthStateEvent
from .session import AuthSession

logger = logging.getLogger(__name__)

POPUP_CLOSED = "auth/popup-closed-by-user"
POPUP_BLOCKED = "auth/popup-blocked"
NETWORK_ERROR = "auth/network-request-failed"

AUTH_ERROR_MESSAGES = {
    POPUP_CLOSED: "Sign-in cancelled. Please try again.",
    POPUP_BLOCKED: "Popup blocked by browser. Please allow popups and try again.",
    NETWORK_ERROR: "Network error. Please check your connection and try again.",
}
DEFAULT_AUTH_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


def get_auth_error_message(error_code: Optional[str]) -> str:
    """User-facing message for a provider error code."""
    return AUTH_ERROR_MESSAGES.get(error_code or "", DEFAULT_AUTH_ERROR_MESSAGE)


class SupabaseAuthProvider(IAuthProvider):
    """``IAuthProvider`` over a supabase-py client's auth listener."""

    def __init__(self, client: Client):
        self._client = client

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Unsubscribe:
        def listener(event: Any, session: Any) -> None:
            user = getattr(session, "user", None) if session else None
            logger.debug(f"Supabase auth event: {event}")
            callback(
                AuthStateEvent(
                    user_id=user.id if user else None,
                    email=getattr(user, "email", None) if user else None,
                )
            )

        subscription = self._client.auth.on_auth_state_change(listener)
        return subscription.unsubscribe

    async def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except Exception as e:
            code = getattr(e, "code", None)
            logger.warning(f"Sign-out failed: {e}")
            raise SignInError(get_auth_error_message(code), provider_code=code or "") from e


async def sign_out(provider: IAuthProvider, session: AuthSession) -> None:
    """Sign out at the provider, then clear the session."""
    await provider.sign_out()
    session.clear()
