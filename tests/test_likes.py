# tests/test_likes.py
"""Tests for the per-user like toggle."""

import pytest

from inkpost.core.errors import NotFoundError
from inkpost.models import Post
from inkpost.repositories.post_repo import PostRepository
from inkpost.services import post_service


def test_toggle_adds_then_removes(db_session, test_post, test_user) -> None:
    liked = post_service.toggle_like(db_session, test_post.slug, test_user.id)
    assert liked.liked is True
    assert liked.like_count == 1
    assert liked.post.like_user_ids == [test_user.id]

    unliked = post_service.toggle_like(db_session, test_post.slug, test_user.id)
    assert unliked.liked is False
    assert unliked.like_count == 0
    assert unliked.post.like_user_ids == []


def test_toggles_from_distinct_users_accumulate(db_session, test_post, test_user, other_user) -> None:
    post_service.toggle_like(db_session, test_post.slug, test_user.id)
    result = post_service.toggle_like(db_session, str(test_post.id), other_user.id)

    assert result.liked is True
    assert result.like_count == 2
    assert sorted(result.post.like_user_ids) == sorted([test_user.id, other_user.id])


def test_one_users_toggle_leaves_others_likes(db_session, test_post, test_user, other_user) -> None:
    post_service.toggle_like(db_session, test_post.slug, test_user.id)
    post_service.toggle_like(db_session, test_post.slug, other_user.id)
    result = post_service.toggle_like(db_session, test_post.slug, test_user.id)

    assert result.liked is False
    assert result.post.like_user_ids == [other_user.id]


def test_add_like_is_idempotent(db_session, test_post, test_user) -> None:
    repo = PostRepository(db_session)

    assert repo.add_like(test_post.id, test_user.id) is True
    assert repo.add_like(test_post.id, test_user.id) is False
    db_session.commit()

    assert repo.like_count(test_post.id) == 1
    assert repo.has_like(test_post.id, test_user.id) is True


def test_remove_like_when_absent(db_session, test_post, test_user) -> None:
    repo = PostRepository(db_session)
    assert repo.remove_like(test_post.id, test_user.id) is False
    assert repo.like_count(test_post.id) == 0


def test_toggle_on_missing_post(db_session, test_user) -> None:
    with pytest.raises(NotFoundError):
        post_service.toggle_like(db_session, "missing-post", test_user.id)


def test_deleting_post_removes_its_likes(db_session, test_post, test_user, other_user) -> None:
    post_service.toggle_like(db_session, test_post.slug, other_user.id)
    post_id = test_post.id

    post_service.delete_post(db_session, test_post.slug, test_user.id)

    assert db_session.get(Post, post_id) is None
    assert PostRepository(db_session).like_count(post_id) == 0
