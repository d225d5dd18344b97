"""Store and fetch uploaded images."""
from __future__ import annotations

from sqlalchemy.orm import Session

from inkpost.core.errors import NotFoundError, ValidationError, atomic
from inkpost.core.settings import Settings
from inkpost.models import Image


def store_image(
    db: Session,
    settings: Settings,
    *,
    filename: str,
    content_type: str,
    data: bytes,
) -> Image:
    """Persist an uploaded image as-is.

    Raises:
        ValidationError: If the payload is not an image, is empty, or exceeds
            the configured size limit.
    """
    if not content_type.startswith("image/"):
        raise ValidationError("Only image uploads are accepted", field="image")
    if not data:
        raise ValidationError("Uploaded image is empty", field="image")
    if len(data) > settings.max_image_bytes:
        raise ValidationError(
            f"Image exceeds the {settings.max_image_bytes} byte limit",
            field="image",
        )

    image = Image(filename=filename, content_type=content_type, data=data)
    with atomic(db):
        db.add(image)
    db.refresh(image)
    return image


def get_image(db: Session, image_id: int) -> Image:
    """Return a stored image, or raise `NotFoundError`."""
    image = db.get(Image, image_id)
    if image is None:
        raise NotFoundError("Image not found")
    return image
