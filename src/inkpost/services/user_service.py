"""Account management and the user-deletion cascade."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from inkpost.core import security
from inkpost.core.errors import AuthError, NotFoundError, atomic
from inkpost.core.settings import Settings
from inkpost.models import DELETED_USER_DISPLAY_NAME, Comment, Post, PostLike, User

__all__ = [
    "authenticate",
    "delete_user",
    "get_user",
    "register_user",
    "update_user",
]

logger = logging.getLogger(__name__)

EMAIL_CONFLICT_MESSAGE = "An account with this email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def get_user(db: Session, user_id: int) -> User:
    """Return a single user by primary key, or raise `NotFoundError`."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def register_user(
    db: Session,
    settings: Settings,
    *,
    fullname: str,
    email: str,
    password: str,
    avatar_url: str | None = None,
) -> User:
    """Persist a new user with a hashed password.

    Raises:
        ConflictError: If the email is already registered.
    """
    user = User(
        fullname=fullname.strip(),
        email=email.strip().lower(),
        password_hash=security.hash_password(password, rounds=settings.bcrypt_rounds),
        avatar_url=avatar_url,
    )
    with atomic(db, conflict=EMAIL_CONFLICT_MESSAGE):
        db.add(user)
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(db: Session, *, email: str, password: str) -> User:
    """Return the user matching the credentials.

    Raises:
        AuthError: If the email is unknown or the password does not match.
    """
    user = db.scalars(select(User).where(User.email == email.strip().lower())).first()
    if user is None or not security.verify_password(password, user.password_hash):
        raise AuthError(INVALID_CREDENTIALS_MESSAGE)
    return user


def update_user(
    db: Session,
    settings: Settings,
    user_id: int,
    changes: dict[str, object],
) -> User:
    """Apply partial profile updates; a new password is re-hashed."""
    user = get_user(db, user_id)
    with atomic(db, conflict=EMAIL_CONFLICT_MESSAGE):
        if changes.get("fullname"):
            user.fullname = str(changes["fullname"]).strip()
        if changes.get("email"):
            user.email = str(changes["email"]).strip().lower()
        if changes.get("password"):
            user.password_hash = security.hash_password(
                str(changes["password"]), rounds=settings.bcrypt_rounds
            )
        if "avatar_url" in changes:
            user.avatar_url = changes["avatar_url"]  # type: ignore[assignment]
    db.refresh(user)
    return user


def anonymize_user_content(db: Session, user_id: int) -> None:
    """Detach a user from all their content and drop their likes.

    Posts and comments keep existing but lose their author and show the
    deleted-user placeholder. Every statement is addressed by a filter, so all
    matching rows are changed. Re-running it is harmless.
    """
    anonymized = {
        "author_id": None,
        "anonymous": True,
        "anonymous_author": DELETED_USER_DISPLAY_NAME,
    }
    with atomic(db):
        posts = db.execute(
            update(Post)
            .where(Post.author_id == user_id)
            .values(**anonymized)
            .execution_options(synchronize_session=False)
        )
        comments = db.execute(
            update(Comment)
            .where(Comment.author_id == user_id)
            .values(**anonymized)
            .execution_options(synchronize_session=False)
        )
        likes = db.execute(
            delete(PostLike)
            .where(PostLike.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
    logger.info(
        "Anonymized user %s: %d posts, %d comments, %d likes removed",
        user_id,
        posts.rowcount,
        comments.rowcount,
        likes.rowcount,
    )


def delete_user(db: Session, user_id: int) -> None:
    """Delete an account after anonymizing everything it owns.

    The anonymization commits before the account row is removed. If removing
    the row fails, the content stays anonymized and the whole call can be
    retried.

    Raises:
        NotFoundError: If the user does not exist.
        InternalError: If either step fails in the store.
    """
    get_user(db, user_id)
    anonymize_user_content(db, user_id)
    with atomic(db):
        db.execute(delete(User).where(User.id == user_id))
    logger.info("Deleted user %s", user_id)
