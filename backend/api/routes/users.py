"""
User-related endpoints.

Provides endpoints for the signed-in user's own profile and credits.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from shared.models import AuthenticatedUser
from modules.credits.interfaces import ICreditsService
from modules.credits.models import CreditsResponse
from modules.credits.validation import has_any_credits
from modules.profiles.exceptions import (
    ProfileNotFoundError,
    ProfileValidationError,
    SecurityViolationError,
)
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import BirthDetails, UserProfile
from ..middleware.auth import get_current_user
from ..dependencies import get_credits_service, get_profile_service

router = APIRouter()


@router.get("/me", response_model=UserProfile)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    """
    Get the current user's profile.

    Requires authentication.
    """
    profile = await profiles.get_profile(user.id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.patch("/me", response_model=UserProfile)
async def update_current_user_profile(
    updates: dict[str, Any] = Body(...),
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    """
    Update editable fields of the current user's profile.

    Attempts to touch ``id``, ``role``, ``credits`` or ``created_at`` are
    refused with 403 and nothing is written.
    """
    try:
        return await profiles.update_profile(user.id, updates)
    except SecurityViolationError as e:
        raise HTTPException(status_code=403, detail=e.message)
    except ProfileValidationError as e:
        raise HTTPException(status_code=422, detail=e.details["errors"])
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")


@router.put("/me/birth-details", response_model=UserProfile)
async def update_birth_details(
    details: BirthDetails,
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    """Save date, time and place of birth."""
    try:
        return await profiles.update_birth_details(user.id, details)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")


@router.post("/me/terms", response_model=UserProfile)
async def accept_terms(
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    """Record acceptance of the terms of service and privacy policy."""
    try:
        return await profiles.record_terms_acceptance(user.id)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")


@router.get("/me/credits", response_model=CreditsResponse)
async def get_current_user_credits(
    user: AuthenticatedUser = Depends(get_current_user),
    credits: ICreditsService = Depends(get_credits_service),
) -> CreditsResponse:
    """Current credit balances."""
    try:
        balance = await credits.get_credits(user.id)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")
    return CreditsResponse(credits=balance, has_any_credits=has_any_credits(balance))
