"""Comment operations that keep each post's comment list in sync.

A post's ordered comment list and the set of comment rows pointing at that post
must always agree. Creation and deletion therefore write both sides inside one
transaction; if either write fails, both are rolled back.
"""
from __future__ import annotations

import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from inkpost.core.errors import NotFoundError, ValidationError, atomic
from inkpost.db.time import utcnow
from inkpost.models import ANONYMOUS_DISPLAY_NAME, Comment
from inkpost.models.comment import COMMENT_MAX_LENGTH, COMMENT_MIN_LENGTH
from inkpost.repositories.post_repo import PostRepository
from inkpost.services.post_service import get_post_or_404

logger = logging.getLogger(__name__)

COMMENT_NOT_FOUND_MESSAGE = "Comment not found or you are not allowed to change it"


def clean_comment_text(text: str) -> str:
    """Trim `text` and check it is 3 to 1000 characters long.

    Raises:
        ValidationError: If the trimmed text is too short or too long.
    """
    cleaned = text.strip()
    if not COMMENT_MIN_LENGTH <= len(cleaned) <= COMMENT_MAX_LENGTH:
        raise ValidationError(
            f"Comment text must be {COMMENT_MIN_LENGTH}-{COMMENT_MAX_LENGTH} characters long",
            field="text",
        )
    return cleaned


def _load_comment(db: Session, comment_id: int) -> Comment:
    stmt = (
        select(Comment)
        .where(Comment.id == comment_id)
        .options(selectinload(Comment.author), selectinload(Comment.post))
        .execution_options(populate_existing=True)
    )
    comment = db.scalars(stmt).first()
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def add_comment(
    db: Session,
    post_ref: str | int,
    *,
    text: str,
    author_id: int,
    anonymous: bool = False,
) -> Comment:
    """Create a comment and append it to its post's comment list.

    Raises:
        NotFoundError: If the post does not exist, including when it is deleted
            before the writes land; nothing is written.
        ValidationError: If the text length is outside 3..1000.
        InternalError: If the store fails; both writes are rolled back.
    """
    post = get_post_or_404(db, post_ref)
    post_id = post.id
    cleaned = clean_comment_text(text)

    comment = Comment(
        text=cleaned,
        post_id=post_id,
        author_id=author_id,
        anonymous=anonymous,
        anonymous_author=ANONYMOUS_DISPLAY_NAME if anonymous else None,
    )
    repo = PostRepository(db)
    with atomic(db):
        try:
            db.add(comment)
            db.flush()
            repo.push_comment(post_id, comment.id)
        except IntegrityError:
            db.rollback()
            if repo.get_by_id(post_id) is None:
                raise NotFoundError("Post not found") from None
            raise

    logger.debug("Comment %s added to post %s", comment.id, post_id)
    return _load_comment(db, comment.id)


def delete_comment(db: Session, comment_id: int, user_id: int) -> None:
    """Delete the caller's comment and pull it from its post's comment list.

    Deletion is keyed by comment id and author only. Comments by other users
    are reported as missing so their existence is not disclosed.

    Raises:
        NotFoundError: If no comment with that id belongs to `user_id`.
        InternalError: If the store fails; both writes are rolled back.
    """
    comment = db.scalars(
        select(Comment).where(Comment.id == comment_id, Comment.author_id == user_id)
    ).first()
    if comment is None:
        raise NotFoundError(COMMENT_NOT_FOUND_MESSAGE)

    post_id = comment.post_id
    with atomic(db):
        PostRepository(db).pull_comment(post_id, comment_id)
        db.execute(delete(Comment).where(Comment.id == comment_id))
    logger.debug("Comment %s removed from post %s", comment_id, post_id)


def edit_comment(
    db: Session,
    comment_id: int,
    user_id: int,
    *,
    text: str,
    anonymous: bool = False,
) -> Comment:
    """Update the text and anonymity of the caller's comment in place.

    Raises:
        ValidationError: If the text length is outside 3..1000.
        NotFoundError: If no comment with that id belongs to `user_id`.
    """
    cleaned = clean_comment_text(text)
    with atomic(db):
        result = db.execute(
            update(Comment)
            .where(Comment.id == comment_id, Comment.author_id == user_id)
            .values(
                text=cleaned,
                anonymous=anonymous,
                anonymous_author=ANONYMOUS_DISPLAY_NAME if anonymous else None,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError(COMMENT_NOT_FOUND_MESSAGE)
    return _load_comment(db, comment_id)


def list_post_comments(db: Session, post_ref: str | int) -> list[Comment]:
    """Return a post's comments, newest first."""
    post = get_post_or_404(db, post_ref)
    stmt = (
        select(Comment)
        .where(Comment.post_id == post.id)
        .options(selectinload(Comment.author), selectinload(Comment.post))
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return list(db.scalars(stmt))


def list_comments(db: Session, *, page: int = 1, limit: int = 20) -> list[Comment]:
    """Return one page of all comments, newest first."""
    page = max(page, 1)
    stmt = (
        select(Comment)
        .options(selectinload(Comment.author), selectinload(Comment.post))
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(db.scalars(stmt))


def count_comments(db: Session) -> int:
    """Return the total number of comments."""
    return db.scalar(select(func.count()).select_from(Comment)) or 0


def latest_comments(db: Session, limit: int = 5) -> list[Comment]:
    """Return the most recent comments across all posts."""
    return list_comments(db, page=1, limit=limit)
