"""
Base repository class for database access.

Repositories wrap a Supabase client and map table rows to Pydantic models.
Store errors are translated into ``UpstreamFailureError`` so services never
see raw client exceptions.
"""

import logging
from typing import Any, TypeVar, Generic

from supabase import Client

from .exceptions import UpstreamFailureError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses set ``table_name`` and implement domain-specific access
    methods that return models of type ``T``.

    Example:
        class ProfileRepository(BaseRepository[UserProfile]):
            table_name = "users"

            def get_by_id(self, user_id: str) -> Optional[UserProfile]:
                result = self._execute(
                    self._table().select("*").eq("id", user_id), "select"
                )
                if not result.data:
                    return None
                return map_profile_row(result.data[0])
    """

    table_name: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _table(self):
        """Query builder for this repository's table."""
        return self._db.table(self.table_name)

    def _execute(self, query: Any, operation: str) -> Any:
        """
        Execute a query builder, wrapping client failures.

        Raises:
            UpstreamFailureError: If the Supabase call fails for any reason.
        """
        try:
            return query.execute()
        except Exception as e:
            logger.error(f"{self.table_name} {operation} failed: {e}")
            raise UpstreamFailureError(
                f"Database {operation} on {self.table_name} failed",
                details={"table": self.table_name, "operation": operation},
            ) from e
