"""Image upload schemas."""

from pydantic import BaseModel


class ImageUploadResponse(BaseModel):
    """Identifier and public URL of a stored image."""

    id: int
    url: str
    filename: str
    content_type: str
