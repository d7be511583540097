"""
Profile repository for database access.

Encapsulates Supabase queries against the ``users`` table and maps rows
to ``UserProfile``. No authorization checks happen here; the service layer
decides what may be written.
"""

from typing import Any, Optional

from shared.exceptions import UpstreamFailureError
from shared.repository import BaseRepository
from .exceptions import ProfileAlreadyExistsError
from .models import UserProfile

UNIQUE_VIOLATION = "23505"


def map_profile_row(row: dict[str, Any]) -> UserProfile:
    """Map a ``users`` row to a ``UserProfile``."""
    return UserProfile(**row)


def is_unique_violation(error: BaseException) -> bool:
    """True for a Postgres duplicate-key failure as surfaced by postgrest."""
    return (
        getattr(error, "code", None) == UNIQUE_VIOLATION
        or "duplicate key value" in str(error)
    )


class ProfileRepository(BaseRepository[UserProfile]):
    """Repository for user profile rows."""

    table_name = "users"

    def get_row(self, user_id: str) -> Optional[dict[str, Any]]:
        """Raw row for ``user_id``, or None if missing."""
        result = self._execute(
            self._table().select("*").eq("id", user_id),
            "select",
        )
        if not result.data:
            return None
        return result.data[0]

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        row = self.get_row(user_id)
        if row is None:
            return None
        return map_profile_row(row)

    def get_by_email(self, email: str) -> Optional[UserProfile]:
        result = self._execute(
            self._table().select("*").eq("email", email),
            "select",
        )
        if not result.data:
            return None
        return map_profile_row(result.data[0])

    def insert(self, data: dict[str, Any]) -> UserProfile:
        """
        Insert a new row.

        Raises:
            ProfileAlreadyExistsError: If a row with the same id was written first
        """
        try:
            result = self._execute(self._table().insert(data), "insert")
        except UpstreamFailureError as e:
            if e.__cause__ is not None and is_unique_violation(e.__cause__):
                raise ProfileAlreadyExistsError(data["id"]) from e.__cause__
            raise
        return map_profile_row(result.data[0])

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserProfile]:
        """
        Update columns for ``user_id``.

        Returns:
            The updated profile, or None if no row matched.
        """
        result = self._execute(
            self._table().update(data).eq("id", user_id),
            "update",
        )
        if not result.data:
            return None
        return map_profile_row(result.data[0])

    def list_profiles(self, limit: int = 50, offset: int = 0) -> list[UserProfile]:
        """Profiles ordered newest first."""
        result = self._execute(
            self._table()
            .select("*")
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1),
            "select",
        )
        return [map_profile_row(row) for row in result.data or []]
