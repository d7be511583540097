"""
Persona image module.

Validates, compresses and uploads the admin-curated persona image shown
on a user's profile.

Public API:
- validate_image_file, format_file_size: File-picker validation
- compress_image, calculate_dimensions: Compression pipeline
- PersonaStorage: Blob storage wrapper
- PersonaUploadService, UploadHandle: Cancellable upload flow
- Persona exceptions: ImageValidationError, ImageDecodeError, etc.
"""

from .models import CompressedImage, PersonaUploadResult, JPEG_CONTENT_TYPE
from .validation import ALLOWED_IMAGE_TYPES, validate_image_file, format_file_size
from .compression import calculate_dimensions, compress_image
from .exceptions import (
    PersonaError,
    ImageValidationError,
    ImageDecodeError,
    UploadCancelledError,
)

__all__ = [
    # Models
    "CompressedImage",
    "PersonaUploadResult",
    "JPEG_CONTENT_TYPE",
    # Validation
    "ALLOWED_IMAGE_TYPES",
    "validate_image_file",
    "format_file_size",
    # Compression
    "calculate_dimensions",
    "compress_image",
    # Exceptions
    "PersonaError",
    "ImageValidationError",
    "ImageDecodeError",
    "UploadCancelledError",
]
