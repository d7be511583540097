"""
Profiles module exceptions.
"""

from typing import Any, Iterable

from shared.exceptions import (
    CelestiaError,
    NotFoundError,
    ValidationError,
    AuthorizationError,
    ConflictError,
)


class ProfileError(CelestiaError):
    """Base exception for profile-related errors."""

    pass


class ProfileNotFoundError(NotFoundError):
    """Raised when a user profile row doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Profile not found: {user_id}",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )


class ProfileAlreadyExistsError(ConflictError):
    """Raised when creating a profile that already exists."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Profile already exists: {user_id}",
            code="PROFILE_EXISTS",
            details={"user_id": user_id},
        )


class ProfileValidationError(ValidationError):
    """Raised when a profile update or birth details fail validation."""

    def __init__(self, errors: list[dict[str, Any]]):
        message = "; ".join(e["message"] for e in errors) or "Invalid profile data"
        super().__init__(
            message,
            code="INVALID_PROFILE",
            details={"errors": errors},
        )


class SecurityViolationError(AuthorizationError):
    """
    Raised when an update payload tries to write a protected field.

    Nothing is written when this is raised.
    """

    def __init__(self, fields: Iterable[str]):
        fields = sorted(fields)
        super().__init__(
            f"Cannot update protected field(s): {', '.join(fields)}",
            code="SECURITY_VIOLATION",
            details={"fields": fields},
        )
