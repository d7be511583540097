"""
Image compression pipeline.

Caps the longer side of an image, re-encodes it as JPEG at a fixed quality
and returns the bytes for upload. Output is always ``image/jpeg`` whatever
the input format.
"""

import io
import logging
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from shared.config import get_settings

from .exceptions import ImageDecodeError, ImageValidationError
from .models import CompressedImage, JPEG_CONTENT_TYPE
from .validation import format_file_size

logger = logging.getLogger(__name__)

MAX_DIMENSION = 1024
JPEG_QUALITY = 80


def calculate_dimensions(
    width: int,
    height: int,
    max_dimension: int = MAX_DIMENSION,
) -> tuple[int, int]:
    """
    Target size with the longer side capped at ``max_dimension``.

    Images already within bounds keep their size (no upscaling). Otherwise
    the aspect ratio of the source is preserved, rounding the shorter side
    to the nearest pixel.
    """
    if width <= max_dimension and height <= max_dimension:
        return width, height

    aspect_ratio = width / height
    if width > height:
        return max_dimension, max(1, round(max_dimension / aspect_ratio))
    return max(1, round(max_dimension * aspect_ratio)), max_dimension


def compress_image(
    data: bytes,
    content_type: str,
    max_dimension: Optional[int] = None,
    quality: Optional[int] = None,
) -> CompressedImage:
    """
    Resize and re-encode an image as JPEG.

    Args:
        data: Raw bytes of the selected file
        content_type: Declared media type of the file
        max_dimension: Cap for the longer side (settings default: 1024)
        quality: JPEG quality 1-95 (settings default: 80)

    Raises:
        ImageValidationError: If ``content_type`` is not an image type
        ImageDecodeError: If ``data`` cannot be decoded as an image
    """
    settings = get_settings()
    max_dimension = max_dimension or settings.persona_max_dimension
    quality = quality or settings.persona_jpeg_quality

    if not (content_type or "").lower().startswith("image/"):
        raise ImageValidationError(
            "File must be an image",
            reason="type",
            details={"content_type": content_type},
        )

    try:
        # The context manager closes the decoder's file handle on every path.
        with Image.open(io.BytesIO(data)) as source:
            source.load()
            image = ImageOps.exif_transpose(source)
            if image.mode != "RGB":
                image = image.convert("RGB")
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        logger.debug(f"Image decode failed ({content_type}, {len(data)} bytes): {e}")
        raise ImageDecodeError() from e

    width, height = calculate_dimensions(image.width, image.height, max_dimension)
    if (width, height) != image.size:
        image = image.resize((width, height), Image.Resampling.LANCZOS)

    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality, optimize=True)
    compressed = buffer.getvalue()

    logger.debug(
        f"Compressed {content_type} {format_file_size(len(data))} -> "
        f"{width}x{height} JPEG {format_file_size(len(compressed))}"
    )
    return CompressedImage(
        data=compressed,
        content_type=JPEG_CONTENT_TYPE,
        width=width,
        height=height,
    )
