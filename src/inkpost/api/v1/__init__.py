# src/inkpost/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    comments_router,
    images_router,
    posts_router,
    tags_router,
    users_router,
)

__all__ = [
    "auth_router",
    "comments_router",
    "images_router",
    "posts_router",
    "tags_router",
    "users_router",
]
