# src/inkpost/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from .common import AuthorSummary


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=6, max_length=255, description="Post title")
    description: str = Field(..., min_length=6, max_length=10000, description="Post body")
    tags: str | list[str] | None = Field(
        None,
        description="Comma-separated string or list of tags",
    )
    photo: list[str] | None = Field(None, description="Photo URLs or stored image ids")
    is_published: bool = False
    anonymous: bool = False


class PostUpdate(BaseModel):
    """Schema for a partial post update; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=6, max_length=255)
    description: str | None = Field(None, min_length=6, max_length=10000)
    tags: str | list[str] | None = None
    photo: list[str] | None = None
    is_published: bool | None = None
    anonymous: bool | None = None


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    slug: str
    description: str
    photos: list[str]
    tags: list[str]
    author: AuthorSummary | None
    anonymous: bool
    anonymous_author: str | None
    views: int
    is_published: bool
    likes: list[int]
    like_count: int
    comments: list[int]
    comment_count: int
    created_at: datetime
    updated_at: datetime


class LikeToggleResponse(BaseModel):
    """Outcome of a like toggle; `liked` tells the caller which way it went."""

    liked: bool
    like_count: int
    post: PostResponse
