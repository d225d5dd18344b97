"""Data access helpers for working with posts.

Every mutation of a post's shared collections (the likes set and the ordered
comment list) goes through a single statement here, so concurrent requests
never overwrite each other's changes.
"""
from __future__ import annotations

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkpost.models import Post, PostComment, PostLike

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def get_by_slug(self, slug: str) -> Post | None:
        """Return a post by slug."""
        return self.session.scalars(select(Post).where(Post.slug == slug)).first()

    def resolve(self, ref: str | int) -> Post | None:
        """Return the post named by a slug or a numeric identifier.

        Slugs win over ids, so a post titled "2024" stays reachable by its slug.
        """
        if isinstance(ref, int):
            return self.get_by_id(ref)
        post = self.get_by_slug(ref)
        if post is None and ref.isdigit():
            post = self.get_by_id(int(ref))
        return post

    def increment_views(self, post_id: int) -> int:
        """Add one view in place and return the number of rows touched."""
        result = self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(views=Post.views + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def push_comment(self, post_id: int, comment_id: int) -> None:
        """Append a comment id to the end of the post's comment list."""
        self.session.execute(insert(PostComment).values(post_id=post_id, comment_id=comment_id))

    def pull_comment(self, post_id: int, comment_id: int) -> int:
        """Remove a comment id from the post's comment list."""
        result = self.session.execute(
            delete(PostComment)
            .where(PostComment.post_id == post_id, PostComment.comment_id == comment_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def add_like(self, post_id: int, user_id: int) -> bool:
        """Add `user_id` to the likes set unless already present.

        Returns:
            True if a row was inserted, False if the user was already a member.
        """
        values = {"post_id": post_id, "user_id": user_id}
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as pg_insert

            stmt = pg_insert(PostLike).values(**values).on_conflict_do_nothing(
                index_elements=["post_id", "user_id"]
            )
            return self.session.execute(stmt).rowcount > 0
        if dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert as sqlite_insert

            stmt = sqlite_insert(PostLike).values(**values).on_conflict_do_nothing(
                index_elements=["post_id", "user_id"]
            )
            return self.session.execute(stmt).rowcount > 0

        # Other backends: let the primary key reject the duplicate inside a savepoint.
        try:
            with self.session.begin_nested():
                self.session.execute(insert(PostLike).values(**values))
        except IntegrityError:
            return False
        return True

    def remove_like(self, post_id: int, user_id: int) -> bool:
        """Remove `user_id` from the likes set if present."""
        result = self.session.execute(
            delete(PostLike)
            .where(PostLike.post_id == post_id, PostLike.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    def like_count(self, post_id: int) -> int:
        """Return the size of the post's likes set."""
        return self.session.scalar(
            select(func.count()).select_from(PostLike).where(PostLike.post_id == post_id)
        ) or 0

    def has_like(self, post_id: int, user_id: int) -> bool:
        """Return True if `user_id` currently likes the post."""
        stmt = select(PostLike.user_id).where(
            PostLike.post_id == post_id, PostLike.user_id == user_id
        )
        return self.session.scalar(stmt) is not None
