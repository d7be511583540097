"""
Route guard.

Decides, for the current session and path, whether protected content
renders and where to navigate otherwise. Navigation goes through an
injected ``Navigator`` so the guard stays free of any web framework.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from shared.models import UserRole
from modules.auth.session import AuthSession

from .redirects import canonical_redirect, check_access, resolve_redirect
from .routes import Route

logger = logging.getLogger(__name__)


class Navigator(Protocol):
    """Performs navigation to a route."""

    def push(self, path: str) -> None:
        ...


class GuardState(str, Enum):
    INITIALIZING = "initializing"
    UNAUTHENTICATED = "unauthenticated"
    MISROUTED = "misrouted"
    AUTHORIZED = "authorized"


@dataclass(frozen=True)
class GuardDecision:
    """Outcome of one guard evaluation."""

    state: GuardState
    render: bool
    redirect_to: Optional[Route] = None

    @property
    def show_loading(self) -> bool:
        return self.state == GuardState.INITIALIZING


def decide(
    session: AuthSession,
    path: str,
    required_role: Optional[UserRole] = None,
) -> GuardDecision:
    """Pure guard decision; performs no navigation."""
    if session.is_loading:
        return GuardDecision(GuardState.INITIALIZING, render=False)

    user = session.current_user
    if user is None:
        return GuardDecision(GuardState.UNAUTHENTICATED, render=False, redirect_to=Route.LOGIN)

    if not check_access(user, required_role):
        target = resolve_redirect(user)
        # Already on the landing page: render nothing, navigate nowhere.
        redirect_to = None if target.value == path else target
        return GuardDecision(GuardState.MISROUTED, render=False, redirect_to=redirect_to)

    target = canonical_redirect(user, path)
    if target is not None:
        return GuardDecision(GuardState.MISROUTED, render=False, redirect_to=target)

    return GuardDecision(GuardState.AUTHORIZED, render=True)


class ProtectedRoute:
    """
    Guard around a protected view.

    ``evaluate`` is meant to run on every re-render. Navigation is issued
    only when the decision moves into a redirecting state or its target
    changes; re-evaluating with unchanged inputs navigates nowhere.
    """

    def __init__(
        self,
        session: AuthSession,
        navigator: Navigator,
        required_role: Optional[UserRole] = None,
    ):
        self._session = session
        self._navigator = navigator
        self.required_role = required_role
        self._last: Optional[tuple[GuardDecision, str]] = None

    def evaluate(self, path: str) -> GuardDecision:
        decision = decide(self._session, path, self.required_role)

        if decision.redirect_to is not None and self._last != (decision, path):
            logger.debug(
                f"Guard {decision.state.value} on {path}, navigating to "
                f"{decision.redirect_to.value}"
            )
            self._navigator.push(decision.redirect_to.value)

        self._last = (decision, path)
        return decision
