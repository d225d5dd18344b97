"""Image upload and retrieval endpoints."""

from fastapi import APIRouter, File, Response, UploadFile, status

from inkpost.schemas import ImageUploadResponse
from inkpost.services import image_service

from ..dependencies import CurrentUserDep, SessionDep, SettingsDep

router = APIRouter(prefix="/images", tags=["images"])


@router.post("/", response_model=ImageUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    current_user: CurrentUserDep,
    db: SessionDep,
    settings: SettingsDep,
    image: UploadFile = File(...),
) -> ImageUploadResponse:
    """Store an uploaded image and return the URL it is served from."""
    data = await image.read()
    stored = image_service.store_image(
        db,
        settings,
        filename=image.filename or "upload",
        content_type=image.content_type or "application/octet-stream",
        data=data,
    )
    return ImageUploadResponse(
        id=stored.id,
        url=f"{settings.image_base_url}/{stored.id}",
        filename=stored.filename,
        content_type=stored.content_type,
    )


@router.get("/{image_id}")
async def get_image(image_id: int, db: SessionDep) -> Response:
    """Serve the stored image bytes."""
    stored = image_service.get_image(db, image_id)
    return Response(
        content=stored.data,
        media_type=stored.content_type,
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )
