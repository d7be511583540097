"""
Admin console endpoints.

Every route here requires the ``admin`` role.
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from shared.models import AuthenticatedUser
from modules.credits.exceptions import InvalidCreditAmountError
from modules.credits.interfaces import ICreditsService
from modules.credits.models import CreditsResponse, GrantCreditsRequest
from modules.credits.validation import has_any_credits
from modules.personas.exceptions import ImageDecodeError, ImageValidationError
from modules.personas.models import PersonaUploadResult
from modules.personas.upload import PersonaUploadService
from modules.profiles.exceptions import ProfileNotFoundError
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import ProfileListResponse, UserProfile
from ..middleware.auth import RequireAdmin
from ..dependencies import get_credits_service, get_persona_service, get_profile_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_profile_or_404(profiles: IProfileService, user_id: str) -> UserProfile:
    profile = await profiles.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    return profile


@router.get("/users", response_model=ProfileListResponse)
async def list_users(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    admin: AuthenticatedUser = RequireAdmin,
    profiles: IProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """List user profiles, newest first."""
    items = await profiles.list_profiles(limit=limit, offset=offset)
    return ProfileListResponse(profiles=items, limit=limit, offset=offset)


@router.get("/users/{user_id}", response_model=UserProfile)
async def get_user(
    user_id: str,
    admin: AuthenticatedUser = RequireAdmin,
    profiles: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    """Get a single user's profile."""
    return await _get_profile_or_404(profiles, user_id)


@router.post("/users/{user_id}/persona", response_model=PersonaUploadResult, status_code=201)
async def upload_persona(
    user_id: str,
    file: UploadFile = File(...),
    admin: AuthenticatedUser = RequireAdmin,
    profiles: IProfileService = Depends(get_profile_service),
    personas: PersonaUploadService = Depends(get_persona_service),
) -> PersonaUploadResult:
    """
    Upload a persona image for a user.

    The image is validated, downscaled to at most 1024px on its longest
    side and re-encoded as JPEG before storage. Any previous image is
    removed once the profile points at the new one.
    """
    profile = await _get_profile_or_404(profiles, user_id)
    data = await file.read()

    try:
        result = await personas.upload(
            user_id,
            file.content_type,
            data,
            current_image_path=profile.persona_image_path,
        )
    except ImageValidationError as e:
        status_code = 413 if e.reason == "size" and data else 400
        raise HTTPException(status_code=status_code, detail=e.message)
    except ImageDecodeError as e:
        raise HTTPException(status_code=400, detail=e.message)

    logger.info(f"Admin {admin.id} uploaded persona image for {user_id}")
    return result


@router.delete("/users/{user_id}/persona", response_model=UserProfile)
async def remove_persona(
    user_id: str,
    admin: AuthenticatedUser = RequireAdmin,
    profiles: IProfileService = Depends(get_profile_service),
    personas: PersonaUploadService = Depends(get_persona_service),
) -> UserProfile:
    """Remove a user's persona image."""
    profile = await _get_profile_or_404(profiles, user_id)
    logger.info(f"Admin {admin.id} removed persona image for {user_id}")
    return await personas.remove_persona(user_id, profile.persona_image_path)


@router.post("/users/{user_id}/credits", response_model=CreditsResponse)
async def grant_credits(
    user_id: str,
    request: GrantCreditsRequest,
    admin: AuthenticatedUser = RequireAdmin,
    credits: ICreditsService = Depends(get_credits_service),
) -> CreditsResponse:
    """Add credits of one type to a user's balance."""
    try:
        balance = await credits.grant_credits(user_id, request.credit_type, request.amount)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except InvalidCreditAmountError as e:
        raise HTTPException(status_code=400, detail=e.message)

    logger.info(
        f"Admin {admin.id} granted {request.amount} {request.credit_type.value} "
        f"credits to {user_id}"
    )
    return CreditsResponse(credits=balance, has_any_credits=has_any_credits(balance))
