"""
Routing module.

Maps authentication state and role to routes and guards protected views.

Public API:
- Route: Route constants
- resolve_redirect: Landing route for a user (pure)
- ProtectedRoute, decide: Route guard
"""

from .routes import Route, CANONICAL_ROUTES
from .redirects import resolve_redirect, check_access, canonical_redirect
from .guard import GuardDecision, GuardState, Navigator, ProtectedRoute, decide

__all__ = [
    "Route",
    "CANONICAL_ROUTES",
    "resolve_redirect",
    "check_access",
    "canonical_redirect",
    "GuardDecision",
    "GuardState",
    "Navigator",
    "ProtectedRoute",
    "decide",
]
