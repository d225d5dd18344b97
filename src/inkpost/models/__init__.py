# src/inkpost/models/__init__.py
"""SQLAlchemy models for the Inkpost application."""

from .comment import Comment
from .image import Image
from .post import Post, PostComment, PostLike
from .user import ANONYMOUS_DISPLAY_NAME, DELETED_USER_DISPLAY_NAME, User

__all__ = [
    "ANONYMOUS_DISPLAY_NAME", "DELETED_USER_DISPLAY_NAME",
    "Comment",
    "Image",
    "Post", "PostComment", "PostLike",
    "User",
]
