"""
Profiles module interface.

Auth, credits and persona modules depend on IProfileService rather than the
concrete implementation.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import BirthDetails, UserProfile


@runtime_checkable
class IProfileService(Protocol):
    """Contract for reading and writing user profiles."""

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Get a profile by user ID.

        Returns:
            UserProfile if found, None otherwise

        Raises:
            UpstreamFailureError: If the store call fails
        """
        ...

    async def get_profile_by_email(self, email: str) -> Optional[UserProfile]:
        """Get a profile by email, or None."""
        ...

    async def create_profile(
        self,
        user_id: str,
        email: str,
        display_name: Optional[str] = None,
    ) -> UserProfile:
        """
        Create the profile for a newly signed-up user.

        Raises:
            ProfileAlreadyExistsError: If a profile already exists
        """
        ...

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> UserProfile:
        """
        Apply a client-initiated partial update.

        Raises:
            SecurityViolationError: If ``updates`` touches a protected field
                (role included). Nothing is written.
            ProfileValidationError: If a field value is invalid
            ProfileNotFoundError: If the profile doesn't exist
        """
        ...

    async def update_birth_details(self, user_id: str, details: BirthDetails) -> UserProfile:
        """Replace the birth details of a profile."""
        ...

    async def set_persona_image(self, user_id: str, image_url: str, image_path: str) -> UserProfile:
        """Record a newly uploaded persona image on the profile."""
        ...

    async def remove_persona_image(self, user_id: str) -> UserProfile:
        """Clear the persona image fields of a profile."""
        ...

    async def record_login(self, user_id: str) -> None:
        """Stamp ``last_login_at``."""
        ...
