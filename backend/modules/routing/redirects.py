"""
Role-based redirect policy.

Two separate rules that the route guard composes:

- access: does the user's role satisfy a route's required role?
- canonical landing: is the user on the other role's landing page?
"""

from typing import Optional, Protocol

from shared.models import UserRole

from .routes import CANONICAL_ROUTES, Route


class HasRole(Protocol):
    role: UserRole


def resolve_redirect(user: Optional[HasRole]) -> Route:
    """
    Landing route for a user.

    No user goes to login, admins to the admin console, everyone else
    to the dashboard.
    """
    if user is None:
        return Route.LOGIN
    if user.role == UserRole.ADMIN:
        return Route.ADMIN
    return Route.DASHBOARD


def check_access(user: HasRole, required_role: Optional[UserRole]) -> bool:
    """True if no role is required or the user has it."""
    return required_role is None or user.role == required_role


def canonical_redirect(user: HasRole, path: str) -> Optional[Route]:
    """
    Where a user on another role's landing page belongs.

    Returns None unless ``path`` is a landing route that is not the
    user's own.
    """
    if path not in {route.value for route in CANONICAL_ROUTES}:
        return None
    target = resolve_redirect(user)
    if target.value == path:
        return None
    return target
