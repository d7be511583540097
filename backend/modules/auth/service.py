"""
Authentication service implementation.

Validates Supabase JWT tokens and resolves the caller's role from their
stored profile.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
import jwt

from shared.config import get_settings
from shared.models import AuthenticatedUser
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import UserProfile
from modules.profiles.exceptions import ProfileAlreadyExistsError

from .interfaces import IAuthService
from .models import JWTPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication and the profile service
    for roles.
    """

    def __init__(self, profiles: IProfileService):
        self._settings = get_settings()
        self._profiles = profiles

    def decode(self, token: str) -> JWTPayload:
        """Decode and verify a token without touching the profile store."""
        if not token:
            raise MissingTokenError()
        if not self._settings.supabase_jwt_secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
            return JWTPayload(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        The role is always ``user`` here; call ``authenticate`` for the
        stored role.
        """
        payload = self.decode(token)
        return AuthenticatedUser(
            id=payload.sub,
            email=payload.email or "",
            email_verified=payload.email_confirmed_at is not None,
            last_sign_in=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
        )

    async def authenticate(self, token: str) -> AuthenticatedUser:
        payload = self.decode(token)
        profile = await self._ensure_profile(payload)
        return AuthenticatedUser(
            id=payload.sub,
            email=payload.email or profile.email,
            email_verified=payload.email_confirmed_at is not None,
            last_sign_in=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
            role=profile.role,
        )

    async def get_user_by_id(self, user_id: str) -> Optional[UserProfile]:
        return await self._profiles.get_profile(user_id)

    async def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        return await self._profiles.get_profile_by_email(email)

    async def _ensure_profile(self, payload: JWTPayload) -> UserProfile:
        profile = await self._profiles.get_profile(payload.sub)
        if profile is not None:
            return profile

        if not payload.email:
            raise UserNotFoundError(payload.sub)

        try:
            return await self._profiles.create_profile(
                payload.sub,
                payload.email,
                payload.display_name,
            )
        except ProfileAlreadyExistsError:
            # Created by a concurrent request between the read and the insert.
            profile = await self._profiles.get_profile(payload.sub)
            if profile is None:
                raise UserNotFoundError(payload.sub)
            return profile
