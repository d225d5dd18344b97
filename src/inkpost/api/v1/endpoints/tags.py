"""Tag endpoints for the Inkpost API."""

from fastapi import APIRouter

from inkpost.services import post_service

from ..dependencies import SessionDep

router = APIRouter(prefix="/tags", tags=["posts"])


@router.get("/", response_model=list[str])
async def latest_tags(db: SessionDep) -> list[str]:
    """Return up to five distinct tags from the newest posts."""
    return post_service.latest_tags(db)
