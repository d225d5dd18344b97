"""Shape stored entities into API payloads."""
from __future__ import annotations

from inkpost.core.settings import Settings
from inkpost.models import Comment, Post, User
from inkpost.schemas import AuthorSummary, CommentResponse, PostResponse, PostSummary


def format_photo_url(ref: str, settings: Settings) -> str:
    """Return the public URL for a stored photo reference.

    Bare numeric references name rows of the image table; absolute URLs and
    root-relative paths are returned unchanged; anything else is treated as a
    path below the public base URL.
    """
    ref = ref.strip()
    if ref.isdigit():
        return f"{settings.image_base_url}/{ref}"
    if ref.startswith(("http://", "https://", "/")):
        return ref
    return f"{settings.public_base_url.rstrip('/')}/{ref}"


def _author_summary(author: User | None, anonymous: bool) -> AuthorSummary | None:
    if anonymous or author is None:
        return None
    return AuthorSummary.model_validate(author)


def present_post(post: Post, settings: Settings) -> PostResponse:
    """Convert a Post ORM instance to its API schema."""
    likes = post.like_user_ids
    comments = post.comment_ids
    return PostResponse(
        id=post.id,
        title=post.title,
        slug=post.slug,
        description=post.description,
        photos=[format_photo_url(ref, settings) for ref in post.photos or []],
        tags=list(post.tags or []),
        author=_author_summary(post.author, post.anonymous),
        anonymous=post.anonymous,
        anonymous_author=post.anonymous_author,
        views=post.views,
        is_published=post.is_published,
        likes=likes,
        like_count=len(likes),
        comments=comments,
        comment_count=len(comments),
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def present_comment(comment: Comment) -> CommentResponse:
    """Convert a Comment ORM instance to its API schema."""
    return CommentResponse(
        id=comment.id,
        text=comment.text,
        author=_author_summary(comment.author, comment.anonymous),
        post=PostSummary.model_validate(comment.post),
        anonymous=comment.anonymous,
        anonymous_author=comment.anonymous_author,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )
