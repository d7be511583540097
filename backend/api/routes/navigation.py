"""
Navigation endpoints.

Lets the frontend ask where a caller should be sent for a given path.
The same guard logic that protects views decides the answer.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from shared.models import AuthenticatedUser, UserRole
from modules.auth.session import AuthSession
from modules.profiles.interfaces import IProfileService
from modules.routing.guard import GuardState, decide
from modules.routing.redirects import resolve_redirect
from ..middleware.auth import OptionalAuth
from ..dependencies import get_profile_service

router = APIRouter()


class NavigationResponse(BaseModel):
    """Guard outcome for one path."""

    path: str
    state: GuardState
    render: bool
    redirect_to: Optional[str] = None
    landing: str


@router.get("/resolve", response_model=NavigationResponse)
async def resolve_navigation(
    path: str = Query(..., min_length=1),
    required_role: Optional[UserRole] = Query(None),
    user: Optional[AuthenticatedUser] = OptionalAuth,
    profiles: IProfileService = Depends(get_profile_service),
) -> NavigationResponse:
    """
    Evaluate the route guard for ``path``.

    Anonymous callers, and callers whose profile has vanished, are treated
    as signed out.
    """
    session = AuthSession()
    profile = await profiles.get_profile(user.id) if user else None
    if profile is None:
        session.clear()
    else:
        session.set_user(profile)

    decision = decide(session, path, required_role)
    return NavigationResponse(
        path=path,
        state=decision.state,
        render=decision.render,
        redirect_to=decision.redirect_to.value if decision.redirect_to else None,
        landing=resolve_redirect(profile).value,
    )
