"""Comment endpoints for the Inkpost API."""

from fastapi import APIRouter, Query, Response

from inkpost.schemas import CommentResponse, CommentUpdate, MessageResponse
from inkpost.services import comment_service
from inkpost.services.presenters import present_comment

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/", response_model=list[CommentResponse])
async def list_comments(
    db: SessionDep,
    response: Response,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> list[CommentResponse]:
    """List all comments, newest first, one page at a time."""
    response.headers["X-Total-Count"] = str(comment_service.count_comments(db))
    comments = comment_service.list_comments(db, page=page, limit=limit)
    return [present_comment(comment) for comment in comments]


@router.get("/latest", response_model=list[CommentResponse])
async def latest_comments(
    db: SessionDep,
    limit: int = Query(5, ge=1, le=50),
) -> list[CommentResponse]:
    """Return the most recent comments across all posts."""
    return [present_comment(comment) for comment in comment_service.latest_comments(db, limit)]


@router.patch("/{comment_id}", response_model=CommentResponse)
async def edit_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Edit the text or anonymity of the caller's comment."""
    comment = comment_service.edit_comment(
        db,
        comment_id,
        current_user.id,
        text=comment_data.text,
        anonymous=comment_data.anonymous,
    )
    return present_comment(comment)


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Delete the caller's comment."""
    comment_service.delete_comment(db, comment_id, current_user.id)
    return MessageResponse(message="Comment deleted")
