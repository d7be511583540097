"""
Persona image module exceptions.
"""

from typing import Optional

from shared.exceptions import CelestiaError, ValidationError


class PersonaError(CelestiaError):
    """Base exception for persona image errors."""

    pass


class ImageValidationError(ValidationError):
    """
    The selected file was rejected before compression or upload.

    ``message`` is meant to be shown next to the file picker.
    """

    def __init__(self, message: str, reason: str, details: Optional[dict] = None):
        super().__init__(
            message,
            code="INVALID_IMAGE_FILE",
            details={"reason": reason, **(details or {})},
        )
        self.reason = reason


class ImageDecodeError(ValidationError):
    """The file could not be decoded as an image. Not retried."""

    def __init__(self, message: str = "Failed to load image"):
        super().__init__(message, code="IMAGE_DECODE_FAILED")


class UploadCancelledError(PersonaError):
    """The persona upload was cancelled before it completed."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Persona upload cancelled for user {user_id}",
            code="UPLOAD_CANCELLED",
            details={"user_id": user_id},
        )
