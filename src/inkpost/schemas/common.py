"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AuthorSummary(BaseModel):
    """Public fields of a content author."""

    id: int
    fullname: str
    avatar_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class PostSummary(BaseModel):
    """Minimal post reference embedded in comment payloads."""

    id: int
    title: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by delete endpoints."""

    success: bool = True
    message: str = Field(..., description="Human-readable outcome")
