"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from .common import AuthorSummary, PostSummary


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    text: str = Field(..., description="Comment text, 3-1000 characters once trimmed")
    anonymous: bool = False


class CommentUpdate(BaseModel):
    """Schema for editing a comment."""

    text: str = Field(..., description="Replacement text, 3-1000 characters once trimmed")
    anonymous: bool = False


class CommentResponse(BaseModel):
    """Comment with its author and post resolved for display."""

    id: int
    text: str
    author: AuthorSummary | None
    post: PostSummary
    anonymous: bool
    anonymous_author: str | None
    created_at: datetime
    updated_at: datetime


class CommentCreatedResponse(CommentResponse):
    """Payload returned after a successful comment creation."""

    success: bool = True
