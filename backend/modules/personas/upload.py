"""
Persona image upload flow.

Validation and compression happen synchronously in ``start_upload``, so a
rejected file never reaches storage. The upload itself runs in a task and
the caller gets an ``UploadHandle`` whose ``cancel()`` guarantees that
neither the profile update nor the completion callback happens.
"""

import asyncio
import logging
from typing import Callable, Optional

from modules.profiles.interfaces import IProfileService
from modules.profiles.models import UserProfile
from shared.config import get_settings
from shared.exceptions import UpstreamFailureError

from .compression import compress_image
from .exceptions import UploadCancelledError
from .models import CompressedImage, PersonaUploadResult
from .storage import (
    PersonaStorage,
    extract_file_name,
    get_persona_image_path,
    new_persona_file_name,
)
from .validation import validate_image_file

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[str, str], None]


class UploadHandle:
    """
    Capability for one in-flight upload.

    ``cancel()`` is the only control. Awaiting ``result()`` gives the
    outcome.
    """

    def __init__(self, user_id: str):
        self._user_id = user_id
        self._task: Optional["asyncio.Task[PersonaUploadResult]"] = None
        self._completed = False

    def _attach(self, task: "asyncio.Task[PersonaUploadResult]") -> None:
        self._task = task

    def _mark_completed(self) -> None:
        self._completed = True

    @property
    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> bool:
        """
        Cancel the upload.

        Returns:
            False if the upload had already completed, True otherwise
        """
        if self._completed or self._task.done():
            return False
        logger.info(f"Cancelling persona upload for user {self._user_id}")
        return self._task.cancel()

    async def result(self) -> PersonaUploadResult:
        """
        Wait for the upload.

        Raises:
            UploadCancelledError: If the upload was cancelled
            UpstreamFailureError: If storage or the profile write failed
        """
        try:
            return await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if self._task.cancelled():
                raise UploadCancelledError(self._user_id) from None
            raise


class PersonaUploadService:
    """Uploads and removes admin-curated persona images."""

    def __init__(self, storage: PersonaStorage, profiles: IProfileService):
        self._storage = storage
        self._profiles = profiles
        self._settings = get_settings()

    def prepare(self, content_type: Optional[str], data: bytes) -> CompressedImage:
        """
        Validate and compress a selected file.

        Raises:
            ImageValidationError: Wrong type or too large
            ImageDecodeError: Not decodable as an image
        """
        validate_image_file(content_type, len(data), self._settings.persona_max_upload_bytes)
        return compress_image(
            data,
            content_type,
            max_dimension=self._settings.persona_max_dimension,
            quality=self._settings.persona_jpeg_quality,
        )

    def start_upload(
        self,
        user_id: str,
        content_type: Optional[str],
        data: bytes,
        current_image_path: Optional[str] = None,
        on_complete: Optional[CompletionCallback] = None,
    ) -> UploadHandle:
        """
        Validate, compress and begin uploading a persona image.

        Must be called from inside a running event loop. Validation and
        decode errors are raised here, before anything is uploaded.
        """
        image = self.prepare(content_type, data)
        path = get_persona_image_path(user_id, new_persona_file_name())

        handle = UploadHandle(user_id)
        handle._attach(
            asyncio.create_task(
                self._upload(user_id, image, path, current_image_path, on_complete, handle)
            )
        )
        return handle

    async def upload(
        self,
        user_id: str,
        content_type: Optional[str],
        data: bytes,
        current_image_path: Optional[str] = None,
    ) -> PersonaUploadResult:
        """Upload and wait for completion."""
        handle = self.start_upload(user_id, content_type, data, current_image_path)
        return await handle.result()

    async def remove_persona(self, user_id: str, image_path: Optional[str]) -> UserProfile:
        """Delete the stored image and clear the profile fields."""
        if image_path:
            await self._delete_previous(image_path)
        return await self._profiles.remove_persona_image(user_id)

    async def _upload(
        self,
        user_id: str,
        image: CompressedImage,
        path: str,
        current_image_path: Optional[str],
        on_complete: Optional[CompletionCallback],
        handle: UploadHandle,
    ) -> PersonaUploadResult:
        stored = asyncio.ensure_future(
            asyncio.to_thread(self._storage.upload, path, image.data, image.content_type)
        )
        try:
            await asyncio.shield(stored)
        except asyncio.CancelledError:
            await self._discard(stored, path)
            raise

        # Point of no return: from here cancel() reports False and the
        # profile write goes ahead.
        handle._mark_completed()
        url = self._storage.get_public_url(path)
        await self._profiles.set_persona_image(user_id, url, path)
        if on_complete:
            on_complete(url, path)

        if current_image_path and current_image_path != path:
            await self._delete_previous(current_image_path)

        return PersonaUploadResult(
            user_id=user_id,
            image_url=url,
            image_path=path,
            width=image.width,
            height=image.height,
            size=image.size,
        )

    async def _discard(self, stored: "asyncio.Future[str]", path: str) -> None:
        """Remove a blob whose upload finished after cancellation."""
        try:
            await stored
        except UpstreamFailureError:
            return
        try:
            await asyncio.to_thread(self._storage.delete, path)
        except UpstreamFailureError as e:
            logger.warning(f"Failed to remove cancelled upload {path}: {e}")

    async def _delete_previous(self, path: str) -> None:
        try:
            await asyncio.to_thread(self._storage.delete, path)
        except UpstreamFailureError as e:
            logger.warning(f"Failed to delete old persona image {extract_file_name(path)}: {e}")
