"""
File-picker validation for persona images.

Runs before compression. Enforces the same media-type and size policy as
the storage bucket.
"""

from typing import Optional

from shared.config import get_settings

from .exceptions import ImageValidationError

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size: int) -> str:
    """Human-readable size, e.g. ``"2.5 MB"``."""
    if size == 0:
        return "0 Bytes"

    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[unit]}"


def _size_limit_label(max_bytes: int) -> str:
    return f"{max_bytes / (1024 * 1024):g}MB"


def validate_image_file(
    content_type: Optional[str],
    size: int,
    max_bytes: Optional[int] = None,
) -> None:
    """
    Reject anything that is not a small JPEG, PNG or WebP image.

    Raises:
        ImageValidationError: With a message suitable for the user
    """
    if max_bytes is None:
        max_bytes = get_settings().persona_max_upload_bytes

    content_type = (content_type or "").lower()
    if not content_type.startswith("image/"):
        raise ImageValidationError(
            "Only image files are allowed",
            reason="type",
            details={"content_type": content_type},
        )
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ImageValidationError(
            "Only JPEG, PNG, and WebP images are allowed",
            reason="type",
            details={"content_type": content_type},
        )
    if size <= 0:
        raise ImageValidationError("File is empty", reason="size", details={"size": size})
    if size > max_bytes:
        raise ImageValidationError(
            f"File size must be less than {_size_limit_label(max_bytes)}",
            reason="size",
            details={"size": size, "size_label": format_file_size(size), "max_size": max_bytes},
        )
