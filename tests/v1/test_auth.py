# tests/v1/test_auth.py
"""Tests for authentication endpoints."""

from datetime import timedelta

from fastapi import status

from inkpost.core.security import create_access_token
from tests.conftest import TEST_PASSWORD


def _register(client, email="writer@example.com", password="s3cret-password"):
    return client.post(
        "/api/v1/auth/register",
        json={"fullname": "Jane Writer", "email": email, "password": password},
    )


def test_register_user_success(client) -> None:
    """Test successful registration returns a profile and token."""
    response = _register(client, email="Writer@Example.com")
    assert response.status_code == status.HTTP_201_CREATED

    data = response.json()
    assert data["email"] == "writer@example.com"
    assert data["token"]
    assert "password_hash" not in data

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["id"] == data["id"]


def test_register_duplicate_email(client) -> None:
    """Test that an email can only be registered once."""
    assert _register(client).status_code == status.HTTP_201_CREATED

    response = _register(client, email="WRITER@example.com")
    assert response.status_code == status.HTTP_409_CONFLICT


def test_register_rejects_long_password(client) -> None:
    """Test that passwords beyond the bcrypt byte limit are refused."""
    response = _register(client, password="é" * 40)
    assert response.status_code == 422


def test_login_success(client, test_user) -> None:
    """Test logging in with the right password."""
    response = client.post(
        "/api/v1/auth/login",
        json={"email": test_user.email, "password": TEST_PASSWORD},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == test_user.id


def test_login_wrong_password(client, test_user) -> None:
    """Test that a wrong password is rejected."""
    response = client.post(
        "/api/v1/auth/login",
        json={"email": test_user.email, "password": "not-the-password"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid email or password"


def test_me_requires_token(client) -> None:
    """Test that the profile endpoint needs credentials."""
    assert client.get("/api/v1/auth/me").status_code == status.HTTP_401_UNAUTHORIZED


def test_me_rejects_bad_token(client) -> None:
    """Test that a garbage token is rejected."""
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_rejects_expired_token(client, test_user, test_settings) -> None:
    """Test that an expired token is rejected."""
    token = create_access_token(test_user.id, test_settings, expires_delta=timedelta(seconds=-1))
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
