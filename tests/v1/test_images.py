# tests/v1/test_images.py
"""Tests for image upload and retrieval."""

from fastapi import status

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_upload_and_fetch_image(client, auth_token) -> None:
    """Test that an uploaded image is served back byte for byte."""
    response = client.post(
        "/api/v1/images/",
        files={"image": ("cover.png", PNG_BYTES, "image/png")},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["url"] == f"/api/v1/images/{data['id']}"
    assert data["content_type"] == "image/png"

    fetched = client.get(f"/api/v1/images/{data['id']}")
    assert fetched.status_code == status.HTTP_200_OK
    assert fetched.content == PNG_BYTES
    assert fetched.headers["content-type"] == "image/png"


def test_upload_rejects_non_image(client, auth_token) -> None:
    """Test that non-image payloads are refused."""
    response = client.post(
        "/api/v1/images/",
        files={"image": ("notes.txt", b"plain text", "text/plain")},
        headers=auth_token,
    )
    assert response.status_code == 422
    assert response.json()["field"] == "image"


def test_upload_requires_auth(client) -> None:
    """Test that uploads need an authenticated caller."""
    response = client.post("/api/v1/images/", files={"image": ("cover.png", PNG_BYTES, "image/png")})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_missing_image(client) -> None:
    """Test fetching an image that does not exist."""
    assert client.get("/api/v1/images/999").status_code == status.HTTP_404_NOT_FOUND
