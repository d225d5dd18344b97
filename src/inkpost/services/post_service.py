"""Service-level helpers for posts, views, and the like toggle."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from inkpost.core.errors import ForbiddenError, NotFoundError, atomic
from inkpost.models import ANONYMOUS_DISPLAY_NAME, Comment, Post, PostComment, PostLike
from inkpost.repositories.post_repo import PostRepository
from inkpost.services.text import clean_tag, derive_slug, normalize_tags

logger = logging.getLogger(__name__)

SLUG_CONFLICT_MESSAGE = "A post with this title already exists"
LATEST_TAG_POSTS = 5
LATEST_TAG_LIMIT = 5

SortKey = Literal["created", "views"]


@dataclass(frozen=True)
class LikeToggle:
    """Result of a like toggle."""

    post: Post
    liked: bool
    like_count: int


def get_post_or_404(db: Session, post_ref: str | int) -> Post:
    """Resolve a slug or numeric id to a post, or raise `NotFoundError`."""
    post = PostRepository(db).resolve(post_ref)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def _get_owned_post(db: Session, post_ref: str | int, user_id: int) -> Post:
    post = get_post_or_404(db, post_ref)
    if post.author_id != user_id:
        raise ForbiddenError("You can only change your own posts")
    return post


def create_post(
    db: Session,
    *,
    author_id: int,
    title: str,
    description: str,
    tags: str | Sequence[str] | None = None,
    photos: Sequence[str] | None = None,
    is_published: bool = False,
    anonymous: bool = False,
) -> Post:
    """Create a post owned by `author_id`.

    Raises:
        ValidationError: If the tags or title cannot be normalized.
        ConflictError: If another post already uses the derived slug.
    """
    post = Post(
        title=title.strip(),
        slug=derive_slug(title),
        description=description.strip(),
        tags=normalize_tags(tags),
        photos=list(photos or []),
        author_id=author_id,
        is_published=is_published,
        anonymous=anonymous,
        anonymous_author=ANONYMOUS_DISPLAY_NAME if anonymous else None,
    )
    with atomic(db, conflict=SLUG_CONFLICT_MESSAGE):
        db.add(post)
    db.refresh(post)
    logger.info("Post %s created with slug %r", post.id, post.slug)
    return post


def update_post(
    db: Session,
    post_ref: str | int,
    user_id: int,
    changes: dict[str, object],
) -> Post:
    """Apply author-only changes to a post.

    Only keys present in `changes` are touched. A new title re-derives the slug.

    Raises:
        NotFoundError: If the post does not exist.
        ForbiddenError: If `user_id` is not the author.
        ConflictError: If a new title collides with another post's slug.
    """
    post = _get_owned_post(db, post_ref, user_id)
    values: dict[str, object] = {}

    if changes.get("title") is not None:
        title = str(changes["title"])
        values["title"] = title.strip()
        values["slug"] = derive_slug(title)
    if changes.get("description") is not None:
        values["description"] = str(changes["description"]).strip()
    if "tags" in changes:
        values["tags"] = normalize_tags(changes["tags"])  # type: ignore[arg-type]
    if changes.get("photo") is not None:
        values["photos"] = list(changes["photo"])  # type: ignore[call-overload]
    if changes.get("is_published") is not None:
        values["is_published"] = bool(changes["is_published"])
    if changes.get("anonymous") is not None:
        anonymous = bool(changes["anonymous"])
        values["anonymous"] = anonymous
        values["anonymous_author"] = ANONYMOUS_DISPLAY_NAME if anonymous else None

    with atomic(db, conflict=SLUG_CONFLICT_MESSAGE):
        for key, value in values.items():
            setattr(post, key, value)
    db.refresh(post)
    return post


def delete_post(db: Session, post_ref: str | int, user_id: int) -> None:
    """Delete an author's post together with its likes and comments."""
    post = _get_owned_post(db, post_ref, user_id)
    post_id = post.id
    with atomic(db):
        db.execute(delete(PostLike).where(PostLike.post_id == post_id))
        db.execute(delete(PostComment).where(PostComment.post_id == post_id))
        db.execute(delete(Comment).where(Comment.post_id == post_id))
        db.execute(delete(Post).where(Post.id == post_id))
    logger.info("Post %s deleted by user %s", post_id, user_id)


def view_post(db: Session, post_ref: str | int) -> Post:
    """Return a post after counting one more view."""
    post = get_post_or_404(db, post_ref)
    with atomic(db):
        PostRepository(db).increment_views(post.id)
    db.refresh(post)
    return post


def list_posts(
    db: Session,
    *,
    sort_by: SortKey = "created",
    tag: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[Post]:
    """List posts newest-first or most-viewed-first, optionally by tag."""
    if sort_by == "views":
        order = (Post.views.desc(), Post.id.desc())
    else:
        order = (Post.created_at.desc(), Post.id.desc())

    if tag is None:
        stmt = select(Post).order_by(*order).offset(offset).limit(limit)
        return list(db.scalars(stmt))

    # Tags live in a JSON column, so the filter runs here rather than in SQL.
    wanted = clean_tag(tag)
    matching = [post for post in db.scalars(select(Post).order_by(*order)) if wanted in post.tags]
    return matching[offset:offset + limit]


def latest_tags(db: Session) -> list[str]:
    """Return up to five distinct tags taken from the newest posts."""
    posts = db.scalars(
        select(Post).order_by(Post.created_at.desc(), Post.id.desc()).limit(LATEST_TAG_POSTS)
    )
    tags = [tag for post in posts for tag in post.tags][:LATEST_TAG_LIMIT]
    return list(dict.fromkeys(tags))


def toggle_like(db: Session, post_ref: str | int, user_id: int) -> LikeToggle:
    """Flip `user_id`'s membership in the post's likes set.

    The removal and the conditional insert are single statements, so toggles
    from different users never lose each other's updates. Two concurrent
    toggles from the same user resolve as last-write-wins.

    Raises:
        NotFoundError: If the post does not exist.
    """
    post = get_post_or_404(db, post_ref)
    repo = PostRepository(db)
    with atomic(db):
        if repo.remove_like(post.id, user_id):
            liked = False
        else:
            repo.add_like(post.id, user_id)
            liked = True
    db.refresh(post)
    return LikeToggle(post=post, liked=liked, like_count=repo.like_count(post.id))
