# src/inkpost/models/post.py
"""SQLAlchemy models for posts and their like/comment membership."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpost.db.session import Base
from inkpost.db.time import utcnow

if TYPE_CHECKING:
    from .user import User


class Post(Base):
    """Blog article with tags, photos, likes, views and an ordered comment list.

    `likes` and `comment_links` are read-only views over their tables. They are
    changed only through the atomic primitives in `PostRepository`, never by
    mutating these collections and flushing the whole post.
    """

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(300), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    photos: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Null once the author account has been deleted.
    author_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=True,
        index=True,
    )

    # Monotonic; only ever changed by `views = views + 1`.
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    anonymous_author: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    author: Mapped[User | None] = relationship("User")
    likes: Mapped[list[PostLike]] = relationship(
        "PostLike",
        viewonly=True,
        order_by="PostLike.created_at",
    )
    comment_links: Mapped[list[PostComment]] = relationship(
        "PostComment",
        viewonly=True,
        order_by="PostComment.id",
    )

    @property
    def like_user_ids(self) -> list[int]:
        """Return the ids of users currently liking this post."""
        return [like.user_id for like in self.likes]

    @property
    def comment_ids(self) -> list[int]:
        """Return comment ids in the order they were appended."""
        return [link.comment_id for link in self.comment_links]


class PostLike(Base):
    """Membership row of a post's likes set."""

    __tablename__ = "post_like"

    # Composite primary key prevents the same user appearing twice.
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )


class PostComment(Base):
    """Entry of a post's ordered comment list; the row id gives append order."""

    __tablename__ = "post_comment"
    __table_args__ = (Index("ix_post_comment_post_id", "post_id", "id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    # A comment appears in exactly one list, at most once.
    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
