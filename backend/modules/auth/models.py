"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional
from pydantic import BaseModel, Field


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase Auth.

    Google sign-in is a Supabase Auth provider, so Google users get the
    same token shape as any other Supabase user.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Postgres role claim")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)

    @property
    def display_name(self) -> Optional[str]:
        """Name supplied by the identity provider (Google sets full_name)."""
        return self.user_metadata.get("full_name") or self.user_metadata.get("name")


class AuthStateEvent(BaseModel):
    """
    One auth-state change delivered by the identity provider.

    ``user_id`` is None when the user signed out.
    """

    user_id: Optional[str] = None
    email: Optional[str] = None

    @property
    def signed_in(self) -> bool:
        return self.user_id is not None

