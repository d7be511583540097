"""
Credits module data models.

Credits are per-type consumable counters that gate consultation access.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class CreditType(str, Enum):
    """Consultation types that consume credits."""

    CHAT = "chat"
    AUDIO = "audio"
    VIDEO = "video"


class Credits(BaseModel):
    """
    A user's session credit balance.

    Every counter is always present. Missing or null values coming
    from storage are read as zero.
    """

    chat: int = Field(default=0, ge=0, description="Chat consultation credits")
    audio: int = Field(default=0, ge=0, description="Audio consultation credits")
    video: int = Field(default=0, ge=0, description="Video consultation credits")

    @field_validator("chat", "audio", "video", mode="before")
    @classmethod
    def _none_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    def get(self, credit_type: CreditType) -> int:
        """Balance for one credit type."""
        return getattr(self, CreditType(credit_type).value)

    @classmethod
    def from_row(cls, value: Any) -> "Credits":
        """Build from the raw ``credits`` column, tolerating null."""
        if not value:
            return cls()
        return cls(**value)


class GrantCreditsRequest(BaseModel):
    """Admin request to add credits to a user."""

    credit_type: CreditType = Field(..., description="Credit type to grant")
    amount: int = Field(..., gt=0, description="Number of credits to add")


class CreditsResponse(BaseModel):
    """API response for credit queries."""

    credits: Credits
    has_any_credits: bool = Field(..., description="Whether any counter is above zero")
