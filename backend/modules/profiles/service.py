"""
Profile service implementation.

Owns every write to the ``users`` table. Role is assigned once, at
creation, and every client-initiated update is screened for protected
fields before anything reaches the store.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .interfaces import IProfileService
from .models import (
    PROTECTED_FIELDS,
    BirthDetails,
    ProfileUpdate,
    UserProfile,
)
from .exceptions import (
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
    ProfileValidationError,
    SecurityViolationError,
)
from .repository import ProfileRepository
from shared.models import UserRole

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "User"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def default_display_name(email: Optional[str], display_name: Optional[str]) -> str:
    """Display name, else the email local part, else "User"."""
    if display_name:
        return display_name
    if email and email.split("@")[0]:
        return email.split("@")[0]
    return DEFAULT_DISPLAY_NAME


def _format_errors(error: PydanticValidationError) -> list[dict[str, Any]]:
    errors = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "body"
        message = item["msg"].removeprefix("Value error, ")
        if item["type"] == "extra_forbidden":
            message = f"Unknown profile field: {field}"
        errors.append({"field": field, "message": message})
    return errors


class ProfileService(IProfileService):
    """Profile service backed by ``ProfileRepository``."""

    def __init__(self, repository: ProfileRepository):
        self._repository = repository

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._repository.get_by_id(user_id)

    async def get_profile_by_email(self, email: str) -> Optional[UserProfile]:
        return self._repository.get_by_email(email)

    async def list_profiles(self, limit: int = 50, offset: int = 0) -> list[UserProfile]:
        return self._repository.list_profiles(limit=limit, offset=offset)

    async def create_profile(
        self,
        user_id: str,
        email: str,
        display_name: Optional[str] = None,
    ) -> UserProfile:
        if self._repository.get_row(user_id) is not None:
            raise ProfileAlreadyExistsError(user_id)

        now = _now()
        profile = self._repository.insert(
            {
                "id": user_id,
                "email": email,
                "name": default_display_name(email, display_name),
                "date_of_birth": None,
                "time_of_birth": None,
                "place_of_birth": None,
                "persona_image_url": None,
                "persona_image_path": None,
                "persona_uploaded_at": None,
                "role": UserRole.USER.value,
                "credits": {"chat": 0, "audio": 0, "video": 0},
                "created_at": now,
                "updated_at": now,
                "last_login_at": now,
            }
        )
        logger.info(f"Created profile for user {user_id}")
        return profile

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> UserProfile:
        forbidden = PROTECTED_FIELDS.intersection(updates)
        if forbidden:
            logger.warning(
                f"Rejected update to protected field(s) {sorted(forbidden)} for user {user_id}"
            )
            raise SecurityViolationError(forbidden)

        try:
            update = ProfileUpdate(**updates)
        except PydanticValidationError as e:
            raise ProfileValidationError(_format_errors(e)) from e

        data = update.model_dump(mode="json", exclude_unset=True)
        return self._write(user_id, data)

    async def update_birth_details(self, user_id: str, details: BirthDetails) -> UserProfile:
        return self._write(user_id, details.model_dump(mode="json"))

    async def set_persona_image(self, user_id: str, image_url: str, image_path: str) -> UserProfile:
        return self._write(
            user_id,
            {
                "persona_image_url": image_url,
                "persona_image_path": image_path,
                "persona_uploaded_at": _now(),
            },
        )

    async def remove_persona_image(self, user_id: str) -> UserProfile:
        return self._write(
            user_id,
            {
                "persona_image_url": None,
                "persona_image_path": None,
                "persona_uploaded_at": None,
            },
        )

    async def record_login(self, user_id: str) -> None:
        self._write(user_id, {"last_login_at": _now()})

    async def record_terms_acceptance(self, user_id: str) -> UserProfile:
        now = _now()
        return self._write(
            user_id,
            {"agreed_to_terms_at": now, "agreed_to_privacy_at": now},
        )

    def _write(self, user_id: str, data: dict[str, Any]) -> UserProfile:
        data = {**data, "updated_at": _now()}
        profile = self._repository.update(user_id, data)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile
