# tests/test_health.py
from fastapi import status


def test_health_check(client) -> None:
    """Verify that the health endpoint reports the service as up."""
    r = client.get("/health")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "ok"}


def test_root_describes_api(client, test_settings) -> None:
    """Verify that the root endpoint names the API and its version."""
    data = client.get("/").json()
    assert data["version"] == test_settings.app_version
    assert data["docs"] == "/docs"
