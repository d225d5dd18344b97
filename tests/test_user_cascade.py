# tests/test_user_cascade.py
"""Tests for anonymizing content when an account is deleted."""

import pytest
from sqlalchemy import select

from inkpost.core.errors import NotFoundError
from inkpost.models import DELETED_USER_DISPLAY_NAME, Comment, Post, PostLike, User
from inkpost.services import comment_service, post_service, user_service


@pytest.fixture()
def populated(db_session, test_user, other_user, test_post, other_post):
    """Give `test_user` a post, comments on two posts, and likes on both."""
    own_comment = comment_service.add_comment(
        db_session, test_post.slug, text="On my own post", author_id=test_user.id
    )
    foreign_comment = comment_service.add_comment(
        db_session, other_post.slug, text="On someone else's post", author_id=test_user.id
    )
    kept_comment = comment_service.add_comment(
        db_session, other_post.slug, text="Not mine", author_id=other_user.id
    )
    post_service.toggle_like(db_session, test_post.slug, test_user.id)
    post_service.toggle_like(db_session, other_post.slug, test_user.id)
    post_service.toggle_like(db_session, other_post.slug, other_user.id)
    return {
        "post_ids": [test_post.id, other_post.id],
        "own_comment_id": own_comment.id,
        "foreign_comment_id": foreign_comment.id,
        "kept_comment_id": kept_comment.id,
    }


def test_delete_user_anonymizes_posts_and_comments(db_session, test_user, other_user, populated) -> None:
    user_id = test_user.id
    own_post_id, other_post_id = populated["post_ids"]

    user_service.delete_user(db_session, user_id)

    assert db_session.get(User, user_id) is None

    post = db_session.get(Post, own_post_id)
    assert post is not None
    assert post.author_id is None
    assert post.anonymous is True
    assert post.anonymous_author == DELETED_USER_DISPLAY_NAME

    for key in ("own_comment_id", "foreign_comment_id"):
        comment = db_session.get(Comment, populated[key])
        assert comment is not None
        assert comment.author_id is None
        assert comment.anonymous is True
        assert comment.anonymous_author == DELETED_USER_DISPLAY_NAME

    kept = db_session.get(Comment, populated["kept_comment_id"])
    assert kept.author_id == other_user.id
    assert kept.anonymous is False

    other_post = db_session.get(Post, other_post_id)
    assert other_post.author_id == other_user.id
    assert other_post.comment_ids == [populated["foreign_comment_id"], populated["kept_comment_id"]]


def test_delete_user_drops_only_their_likes(db_session, test_user, other_user, populated) -> None:
    user_id = test_user.id
    other_id = other_user.id
    _, other_post_id = populated["post_ids"]

    user_service.delete_user(db_session, user_id)

    remaining = db_session.scalars(select(PostLike.user_id)).all()
    assert user_id not in remaining
    assert remaining == [other_id]
    assert db_session.get(Post, other_post_id).like_user_ids == [other_id]


def test_anonymization_can_be_rerun(db_session, test_user, populated) -> None:
    user_id = test_user.id
    user_service.anonymize_user_content(db_session, user_id)
    user_service.anonymize_user_content(db_session, user_id)

    authored = db_session.scalars(select(Comment).where(Comment.author_id == user_id)).all()
    assert authored == []
    # The account itself is untouched until the second step of delete_user.
    assert db_session.get(User, user_id) is not None

    user_service.delete_user(db_session, user_id)
    assert db_session.get(User, user_id) is None


def test_delete_user_without_content(db_session, make_user) -> None:
    lonely = make_user("Lonely Writer")
    lonely_id = lonely.id
    user_service.delete_user(db_session, lonely_id)
    assert db_session.get(User, lonely_id) is None


def test_delete_unknown_user(db_session) -> None:
    with pytest.raises(NotFoundError):
        user_service.delete_user(db_session, 4242)
