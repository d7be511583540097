"""
JWT Authentication middleware.

Validates Supabase JWT tokens and resolves the caller's role from their
profile.
"""

from typing import Callable, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser, UserRole
from modules.auth.exceptions import InsufficientPermissionsError
from modules.auth.interfaces import IAuthService
from modules.routing.redirects import check_access
from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """Role check failed."""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise AuthError("Missing authorization header")

    try:
        return await auth.authenticate(credentials.credentials)
    except AuthenticationError as e:
        raise AuthError(e.message)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Invalid or expired tokens are treated as anonymous.
    """
    if credentials is None:
        return None

    try:
        return await auth.authenticate(credentials.credentials)
    except AuthenticationError:
        return None


def require_role(role: UserRole) -> Callable:
    """
    Dependency factory that requires ``role``.

    Usage:
        @router.get("/admin-only")
        async def admin_only(user: AuthenticatedUser = Depends(require_role(UserRole.ADMIN))):
            ...
    """

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if not check_access(user, role):
            error = InsufficientPermissionsError(role.value, user.role.value)
            raise ForbiddenError(error.message)
        return user

    return dependency


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
RequireAdmin = Depends(require_role(UserRole.ADMIN))
