"""
Authentication module.

Handles JWT validation, the reactive auth session and the auth-state
observer that resolves a signed-in user's profile.

Public API:
- IAuthService: Interface for auth operations
- IAuthProvider: Seam to the identity provider
- AuthSession: Current user plus loading flag
- AuthObserver: Keeps an AuthSession in sync with the provider
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IAuthProvider
from .models import AuthStateEvent, JWTPayload
from .session import AuthSession
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
    TransientProfileNotFoundError,
    InsufficientPermissionsError,
    SignInError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IAuthProvider",
    # Models
    "AuthStateEvent",
    "JWTPayload",
    # Session
    "AuthSession",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UserNotFoundError",
    "TransientProfileNotFoundError",
    "InsufficientPermissionsError",
    "SignInError",
]
