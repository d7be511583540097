"""
Persona image module data models.
"""

from pydantic import BaseModel, Field

JPEG_CONTENT_TYPE = "image/jpeg"


class CompressedImage(BaseModel):
    """Output of the compression pipeline, ready for upload."""

    data: bytes = Field(..., repr=False)
    content_type: str = Field(default=JPEG_CONTENT_TYPE)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    @property
    def size(self) -> int:
        return len(self.data)


class PersonaUploadResult(BaseModel):
    """A completed persona upload."""

    user_id: str
    image_url: str
    image_path: str
    width: int
    height: int
    size: int = Field(..., description="Compressed size in bytes")
