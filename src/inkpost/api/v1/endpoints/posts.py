# src/inkpost/api/v1/endpoints/posts.py
"""Post-related endpoints for the Inkpost API."""

from typing import Literal

from fastapi import APIRouter, Query, status

from inkpost.schemas import (
    CommentCreate,
    CommentCreatedResponse,
    CommentResponse,
    LikeToggleResponse,
    MessageResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from inkpost.services import comment_service, post_service
from inkpost.services.presenters import present_comment, present_post

from ..dependencies import CurrentUserDep, SessionDep, SettingsDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    settings: SettingsDep,
    sort_by: Literal["created", "views"] = Query("created", description="Sort order"),
    tag: str | None = Query(None, description="Only posts carrying this tag"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of posts to return"),
    offset: int = Query(0, ge=0),
) -> list[PostResponse]:
    """List posts newest first, or by view count."""
    posts = post_service.list_posts(db, sort_by=sort_by, tag=tag, limit=limit, offset=offset)
    return [present_post(post, settings) for post in posts]


@router.get("/{post_ref}", response_model=PostResponse)
async def get_post(post_ref: str, db: SessionDep, settings: SettingsDep) -> PostResponse:
    """Get a post by slug or id, counting the view."""
    post = post_service.view_post(db, post_ref)
    return present_post(post, settings)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    settings: SettingsDep,
) -> PostResponse:
    """Create a new post authored by the caller."""
    post = post_service.create_post(
        db,
        author_id=current_user.id,
        title=post_data.title,
        description=post_data.description,
        tags=post_data.tags,
        photos=post_data.photo,
        is_published=post_data.is_published,
        anonymous=post_data.anonymous,
    )
    return present_post(post, settings)


@router.patch("/{post_ref}", response_model=PostResponse)
async def update_post(
    post_ref: str,
    post_data: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
    settings: SettingsDep,
) -> PostResponse:
    """Update fields of a post owned by the caller."""
    changes = post_data.model_dump(exclude_unset=True)
    post = post_service.update_post(db, post_ref, current_user.id, changes)
    return present_post(post, settings)


@router.delete("/{post_ref}", response_model=MessageResponse)
async def delete_post(
    post_ref: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Delete a post owned by the caller along with its comments and likes."""
    post_service.delete_post(db, post_ref, current_user.id)
    return MessageResponse(message="Post deleted")


@router.post("/{post_ref}/like", response_model=LikeToggleResponse)
async def toggle_like(
    post_ref: str,
    current_user: CurrentUserDep,
    db: SessionDep,
    settings: SettingsDep,
) -> LikeToggleResponse:
    """Like the post, or remove the caller's like if already present."""
    result = post_service.toggle_like(db, post_ref, current_user.id)
    return LikeToggleResponse(
        liked=result.liked,
        like_count=result.like_count,
        post=present_post(result.post, settings),
    )


@router.get("/{post_ref}/comments", response_model=list[CommentResponse])
async def list_post_comments(post_ref: str, db: SessionDep) -> list[CommentResponse]:
    """List a post's comments, newest first."""
    comments = comment_service.list_post_comments(db, post_ref)
    return [present_comment(comment) for comment in comments]


@router.post(
    "/{post_ref}/comments",
    response_model=CommentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_ref: str,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentCreatedResponse:
    """Add a comment to a post."""
    comment = comment_service.add_comment(
        db,
        post_ref,
        text=comment_data.text,
        author_id=current_user.id,
        anonymous=comment_data.anonymous,
    )
    return CommentCreatedResponse(**present_comment(comment).model_dump(), success=True)
