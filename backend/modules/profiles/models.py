"""
Profiles module data models.

A profile row lives in the ``users`` table. Rows are written by the
backend on first sign-in and afterwards only through the profile service,
which never lets a client change the role.
"""

import re
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.models import UserRole
from modules.credits.models import Credits

TIME_OF_BIRTH_PATTERN = re.compile(r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$")
MAX_PLACE_OF_BIRTH_LENGTH = 100

# Fields a client-initiated update may never carry.
PROTECTED_FIELDS = frozenset({"id", "role", "credits", "created_at"})


class UserProfile(BaseModel):
    """
    Full user profile.

    Birth details and persona image are optional until filled in.
    Credits are always present and default to zero.
    """

    # Identity
    id: str = Field(..., description="User ID (UUID from Supabase Auth)")
    email: EmailStr = Field(..., description="Email address")
    name: str = Field(..., description="Display name")

    # Birth details
    date_of_birth: Optional[date] = None
    time_of_birth: Optional[str] = Field(None, description="HH:mm, 24-hour")
    place_of_birth: Optional[str] = None

    # Persona image (admin-uploaded)
    persona_image_url: Optional[str] = None
    persona_image_path: Optional[str] = Field(None, description="Storage path, kept for deletion")
    persona_uploaded_at: Optional[datetime] = None

    # Authorization
    role: UserRole = Field(default=UserRole.USER)

    # Session credits
    credits: Credits = Field(default_factory=Credits)

    # Timestamps
    created_at: datetime
    updated_at: datetime
    last_login_at: Optional[datetime] = None
    agreed_to_terms_at: Optional[datetime] = None
    agreed_to_privacy_at: Optional[datetime] = None

    @field_validator("role", mode="before")
    @classmethod
    def _default_role(cls, value: Any) -> Any:
        return value or UserRole.USER

    @field_validator("credits", mode="before")
    @classmethod
    def _default_credits(cls, value: Any) -> Any:
        return value or {}

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def has_birth_details(self) -> bool:
        return bool(self.date_of_birth and self.time_of_birth and self.place_of_birth)


class BirthDetails(BaseModel):
    """Birth details as entered on the profile form."""

    date_of_birth: date = Field(..., description="Date of birth")
    time_of_birth: str = Field(..., description="Time of birth, HH:mm 24-hour")
    place_of_birth: str = Field(..., description="Place of birth")

    @field_validator("time_of_birth")
    @classmethod
    def _check_time(cls, value: str) -> str:
        if not TIME_OF_BIRTH_PATTERN.match(value):
            raise ValueError("Time must be in HH:mm format (24-hour)")
        return value

    @field_validator("place_of_birth")
    @classmethod
    def _check_place(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Place of birth is required")
        if len(value) > MAX_PLACE_OF_BIRTH_LENGTH:
            raise ValueError("Too long")
        return value


class ProfileUpdate(BaseModel):
    """
    Fields a user may change on their own profile.

    Unknown keys are rejected. Protected keys are rejected earlier by the
    service so they surface as a security violation, not a validation error.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    time_of_birth: Optional[str] = None
    place_of_birth: Optional[str] = None

    @field_validator("time_of_birth")
    @classmethod
    def _check_time(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not TIME_OF_BIRTH_PATTERN.match(value):
            raise ValueError("Time must be in HH:mm format (24-hour)")
        return value

    @field_validator("place_of_birth")
    @classmethod
    def _check_place(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Place of birth is required")
        if len(value) > MAX_PLACE_OF_BIRTH_LENGTH:
            raise ValueError("Too long")
        return value


class ProfileListResponse(BaseModel):
    """Paginated profile list for the admin console."""

    profiles: list[UserProfile]
    limit: int
    offset: int
