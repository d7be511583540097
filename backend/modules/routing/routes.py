"""Application route constants."""

from enum import Enum


class Route(str, Enum):
    """Frontend routes the backend redirects to."""

    HOME = "/"
    LOGIN = "/login"
    DASHBOARD = "/dashboard"
    ADMIN = "/admin"
    PROFILE = "/profile"


# Landing page for each role; see canonical_redirect.
CANONICAL_ROUTES = frozenset({Route.DASHBOARD, Route.ADMIN})
