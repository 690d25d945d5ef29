# tests/test_auth.py

"""
Tests for registration, login and role management.
"""

from datetime import timedelta

from fastapi.testclient import TestClient

from app.security.auth import create_access_token, verify_token


def _register(client: TestClient, username: str = "frontdesk") -> dict:
    response = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "correct-horse-battery",
            "full_name": "Front Desk",
        },
    )
    assert response.status_code == 201
    return response.json()


def test_register_login_and_me(client: TestClient):
    user = _register(client)
    assert user["role"] == "viewer"
    assert user["is_active"] is True

    login = client.post("/api/auth/login", json={"username": "frontdesk", "password": "correct-horse-battery"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "frontdesk"


def test_duplicate_registration(client: TestClient):
    _register(client)
    response = client.post(
        "/api/auth/register",
        json={"username": "frontdesk", "email": "other@example.com", "password": "correct-horse-battery"},
    )
    assert response.status_code == 409


def test_wrong_password(client: TestClient):
    _register(client)
    response = client.post("/api/auth/login", json={"username": "frontdesk", "password": "wrong-password"})
    assert response.status_code == 401


def test_malformed_and_expired_tokens(client: TestClient, viewer):
    assert client.get("/api/auth/me", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401

    expired = create_access_token(viewer.id, viewer.role, expires_delta=timedelta(minutes=-5))
    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"}).status_code == 401


def test_token_round_trip_keeps_subject(viewer):
    payload = verify_token(create_access_token(viewer.id, viewer.role))
    assert payload.sub == viewer.id
    assert payload.role.value == "viewer"


def test_non_admin_cannot_change_own_role(client: TestClient, viewer, auth_headers):
    response = client.put("/api/auth/me", json={"role": "admin", "full_name": "Still Viewer"}, headers=auth_headers(viewer))

    assert response.status_code == 200
    assert response.json()["role"] == "viewer"
    assert response.json()["full_name"] == "Still Viewer"


def test_admin_promotes_user_to_security(client: TestClient, admin, viewer, auth_headers):
    response = client.put(f"/api/auth/users/{viewer.id}", json={"role": "security"}, headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["role"] == "security"


def test_admin_deactivates_user(client: TestClient, admin, viewer, auth_headers):
    response = client.put(f"/api/auth/users/{viewer.id}", json={"is_active": False}, headers=auth_headers(admin))
    assert response.json()["is_active"] is False

    assert client.get("/api/auth/me", headers=auth_headers(viewer)).status_code == 401


def test_manager_cannot_change_roles(client: TestClient, manager, viewer, auth_headers):
    response = client.put(f"/api/auth/users/{viewer.id}", json={"role": "admin"}, headers=auth_headers(manager))
    assert response.status_code == 403


def test_duplicate_email(client: TestClient):
    _register(client)
    response = client.post(
        "/api/auth/register",
        json={"username": "nightshift", "email": "frontdesk@example.com", "password": "correct-horse-battery"},
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "Email already exists"


def test_deactivated_user_cannot_log_in(client: TestClient, admin, auth_headers):
    user = _register(client)
    client.put(f"/api/auth/users/{user['id']}", json={"is_active": False}, headers=auth_headers(admin))

    response = client.post("/api/auth/login", json={"username": "frontdesk", "password": "correct-horse-battery"})

    assert response.status_code == 401
    assert response.json()["detail"] == "User account is inactive"


def test_admin_update_missing_user(client: TestClient, admin, auth_headers):
    response = client.put("/api/auth/users/999", json={"role": "security"}, headers=auth_headers(admin))
    assert response.status_code == 404
