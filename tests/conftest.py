# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from inkpost.core.security import create_access_token, hash_password
from inkpost.core.settings import Settings
from inkpost.db.session import Base, build_engine
from inkpost.db.session import get_db as app_get_session
from inkpost.main import create_app
from inkpost.models import Post, User
from inkpost.services import post_service

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-battery"

_EMAIL_COUNTER = count(1)
_TEST_SETTINGS_INSTANCE = Settings(
    secret_key="test-secret-key",
    database_url=TEST_DB_URL,
    bcrypt_rounds=4,
    debug=False,
)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide the Settings instance the test app is built with."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with a known password."""

    def _make_user(fullname: str = "Test User", email: str | None = None) -> User:
        user = User(
            fullname=fullname,
            email=email or f"user{next(_EMAIL_COUNTER)}@example.com",
            password_hash=hash_password(TEST_PASSWORD, rounds=4),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("Test User")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second user."""
    return make_user("Other User")


@pytest.fixture()
def auth_token(test_user: User, test_settings: Settings) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(test_user.id, test_settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(other_user: User, test_settings: Settings) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token(other_user.id, test_settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def test_post(db_session: Session, test_user: User) -> Post:
    """Create a baseline post authored by the primary test user."""
    return post_service.create_post(
        db_session,
        author_id=test_user.id,
        title="Hello World Example",
        description="A first post used by the tests",
        tags="#python, fastapi",
    )


@pytest.fixture()
def other_post(db_session: Session, other_user: User) -> Post:
    """Create a post authored by the secondary user."""
    return post_service.create_post(
        db_session,
        author_id=other_user.id,
        title="Another Author Writes",
        description="A post owned by somebody else",
    )
