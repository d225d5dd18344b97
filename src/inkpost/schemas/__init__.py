# src/inkpost/schemas/__init__.py
"""Pydantic schemas for request validation and response serialization."""

from .comment import CommentCreate, CommentCreatedResponse, CommentResponse, CommentUpdate
from .common import AuthorSummary, MessageResponse, PostSummary
from .image import ImageUploadResponse
from .post import LikeToggleResponse, PostCreate, PostResponse, PostUpdate
from .user import AuthResponse, LoginRequest, RegisterRequest, UserResponse, UserUpdate

__all__ = [
    "AuthResponse",
    "AuthorSummary",
    "CommentCreate",
    "CommentCreatedResponse",
    "CommentResponse",
    "CommentUpdate",
    "ImageUploadResponse",
    "LikeToggleResponse",
    "LoginRequest",
    "MessageResponse",
    "PostCreate",
    "PostResponse",
    "PostSummary",
    "PostUpdate",
    "RegisterRequest",
    "UserResponse",
    "UserUpdate",
]
