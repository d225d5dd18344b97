# src/inkpost/models/comment.py
"""SQLAlchemy model for comments attached to posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from inkpost.db.session import Base
from inkpost.db.time import utcnow

if TYPE_CHECKING:
    from .post import Post
    from .user import User

COMMENT_MIN_LENGTH = 3
COMMENT_MAX_LENGTH = 1000


class Comment(Base):
    """Short text attached to exactly one post."""

    __tablename__ = "comment"
    __table_args__ = (Index("ix_comment_post_created", "post_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=True,
        index=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id"),
        nullable=False,
    )
    anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    anonymous_author: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    author: Mapped[User | None] = relationship("User")
    post: Mapped[Post] = relationship("Post")

    @validates("post_id")
    def _validate_post_id(self, key: str, value: int) -> int:
        if self.post_id is not None and value != self.post_id:
            raise ValueError("A comment cannot be moved to another post")
        return value
