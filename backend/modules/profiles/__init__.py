"""
Profiles module.

Stores user profiles: identity, birth details, persona image reference,
role and credit balances.

Public API:
- IProfileService: Interface for profile operations
- UserProfile, BirthDetails, ProfileUpdate: Profile models
- Profile exceptions: ProfileNotFoundError, SecurityViolationError, etc.
"""

from .interfaces import IProfileService
from .models import UserProfile, BirthDetails, ProfileUpdate, PROTECTED_FIELDS
from .exceptions import (
    ProfileError,
    ProfileNotFoundError,
    ProfileAlreadyExistsError,
    ProfileValidationError,
    SecurityViolationError,
)

__all__ = [
    # Interface
    "IProfileService",
    # Models
    "UserProfile",
    "BirthDetails",
    "ProfileUpdate",
    "PROTECTED_FIELDS",
    # Exceptions
    "ProfileError",
    "ProfileNotFoundError",
    "ProfileAlreadyExistsError",
    "ProfileValidationError",
    "SecurityViolationError",
]
