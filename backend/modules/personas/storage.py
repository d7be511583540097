"""
Persona image blob storage.

Objects live in the persona bucket at ``{user_id}/persona-{ms}.jpg``. The
object key doubles as the ``persona_image_path`` stored on the profile
so the previous image can be deleted on replacement.
"""

import logging
import time
from typing import Optional

from supabase import Client

from shared.config import get_settings
from shared.exceptions import UpstreamFailureError

from .models import JPEG_CONTENT_TYPE

logger = logging.getLogger(__name__)

STORAGE_SERVICE = "supabase-storage"


def get_persona_image_path(user_id: str, file_name: str) -> str:
    """Object key for a persona image file."""
    return f"{user_id}/{file_name}"


def extract_file_name(storage_path: str) -> str:
    """Last segment of an object key."""
    return storage_path.rsplit("/", 1)[-1] if storage_path else ""


def new_persona_file_name(timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"persona-{timestamp_ms}.jpg"


class PersonaStorage:
    """Persona images in a Supabase Storage bucket."""

    def __init__(self, client: Client, bucket: Optional[str] = None):
        self._client = client
        self.bucket = bucket or get_settings().persona_bucket

    def _bucket(self):
        return self._client.storage.from_(self.bucket)

    def upload(self, path: str, data: bytes, content_type: str = JPEG_CONTENT_TYPE) -> str:
        """
        Store ``data`` at ``path``.

        Raises:
            UpstreamFailureError: If the storage call fails
        """
        try:
            self._bucket().upload(
                path=path,
                file=data,
                file_options={"content-type": content_type, "upsert": "false"},
            )
        except Exception as e:
            logger.error(f"Persona upload to {path} failed: {e}")
            raise UpstreamFailureError(
                "Failed to upload image",
                service=STORAGE_SERVICE,
                details={"path": path},
            ) from e

        logger.info(f"Stored persona image: {path} ({len(data)} bytes)")
        return path

    def delete(self, path: str) -> None:
        """
        Remove the object at ``path``.

        Raises:
            ValueError: If ``path`` is empty
            UpstreamFailureError: If the storage call fails
        """
        if not path:
            raise ValueError("Storage path is required")
        try:
            self._bucket().remove([path])
        except Exception as e:
            raise UpstreamFailureError(
                "Failed to delete image",
                service=STORAGE_SERVICE,
                details={"path": path},
            ) from e
        logger.info(f"Deleted persona image: {path}")

    def get_public_url(self, path: str) -> str:
        return self._bucket().get_public_url(path)
