"""Fixtures for exercising the HTTP API through ``TestClient``."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.interfaces.api.dependencies import get_activity_notifier, get_email_transport
from main import create_app


@pytest.fixture()
def client(notifier, transport):
    """Return a test client whose notifier and email transport are recorded."""

    app = create_app()
    app.dependency_overrides[get_activity_notifier] = lambda: notifier
    app.dependency_overrides[get_email_transport] = lambda: transport
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def login(client, password):
    """Return a helper producing ``Authorization`` headers for an existing user."""

    def _login(email: str, secret: str | None = None) -> dict[str, str]:
        response = client.post(
            "/auth/token",
            data={"username": email, "password": secret or password},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
