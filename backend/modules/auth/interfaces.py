"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete
implementation. IAuthProvider is the seam to the identity provider
(Supabase Auth with Google sign-in) that emits auth-state changes.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.profiles.models import UserProfile

from .models import AuthStateEvent

AuthStateCallback = Callable[[AuthStateEvent], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID and basic info

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def authenticate(self, token: str) -> AuthenticatedUser:
        """
        Validate a token and attach the role stored on the user's profile.

        Creates the profile on first sign-in.
        """
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[UserProfile]:
        """
        Get a user's profile by their ID.

        Returns:
            UserProfile if found, None otherwise
        """
        ...

    async def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        """
        Get a user's profile by their email.

        Returns:
            UserProfile if found, None otherwise
        """
        ...


@runtime_checkable
class IAuthProvider(Protocol):
    """Identity provider that reports sign-in and sign-out."""

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Unsubscribe:
        """
        Register ``callback`` for auth-state changes.

        Returns:
            A callable that removes the registration
        """
        ...

    async def sign_out(self) -> None:
        """End the provider session."""
        ...
