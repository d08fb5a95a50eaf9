"""Tests for registration and the authentication token endpoint."""

from __future__ import annotations

from datetime import timedelta

import pytest

from app.infrastructure.security import create_access_token


def test_register_login_and_me(client) -> None:
    response = client.post(
        "/auth/register",
        json={"email": "Nova@Example.com", "password": "segredo1"},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["email"] == "nova@example.com"
    assert created["name"] == "nova"
    assert created["role"] == "user"

    token_response = client.post(
        "/auth/token",
        data={"username": "NOVA@example.com", "password": "segredo1"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert token_response.status_code == 200
    payload = token_response.json()
    assert payload["token_type"] == "bearer"
    assert payload["role"] == "user"

    me = client.get(
        "/auth/me", headers={"Authorization": f"Bearer {payload['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["email"] == "nova@example.com"
    assert me.json()["last_login"] is not None


def test_register_rejects_taken_email(client, owner) -> None:
    response = client.post(
        "/auth/register",
        json={"email": "OWNER@example.com", "password": "segredo1"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "validation_error"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "password": "segredo1"},
        {"email": "curta@example.com", "password": "123"},
    ],
)
def test_register_validates_payload(client, payload) -> None:
    assert client.post("/auth/register", json=payload).status_code == 422


def test_wrong_password_is_unauthorized(client, owner) -> None:
    response = client.post(
        "/auth/token",
        data={"username": owner.email, "password": "wrong-password"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 401


def test_token_without_password_signature_is_rejected(client, owner) -> None:
    forged = create_access_token(
        data={"sub": owner.email, "role": "admin"}, expires_delta=timedelta(minutes=5)
    )

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {forged}"})

    assert response.status_code == 401


def test_protected_routes_require_a_token(client) -> None:
    assert client.get("/activities/").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401
