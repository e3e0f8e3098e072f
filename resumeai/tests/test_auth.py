"""Tests for /api/auth and the bearer-token gate"""
from datetime import timedelta

from resumeai.app.core.security import create_access_token
from resumeai.app.models.user import User


def test_register_returns_token_and_user(client, db_session):
    r = client.post(
        "/api/auth/register",
        json={"name": "Carol", "email": "Carol@Example.com", "password": "secret1"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["requestId"]
    assert body["data"]["token"]
    assert body["data"]["user"]["email"] == "carol@example.com"
    assert body["data"]["user"]["subscriptionType"] == "free"

    user = db_session.query(User).filter(User.email == "carol@example.com").one()
    assert user.hashed_password != "secret1"


def test_register_duplicate_email_is_case_insensitive(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "Alice Again", "email": "ALICE@example.com", "password": "secret1"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Email already exists"


def test_register_rejects_short_password(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "Dan", "email": "dan@example.com", "password": "123"},
    )
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert "password" in r.json()["message"]


def test_login_success(client):
    r = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "testpass123"})
    assert r.status_code == 200
    assert r.json()["message"] == "Login successful"
    assert r.json()["data"]["user"]["id"] == 1


def test_login_wrong_password(client):
    r = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials"


def test_me_requires_token(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    body = r.json()
    assert body == {"success": False, "message": "Token required", "requestId": body["requestId"]}


def test_me_rejects_bad_signature(client):
    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 403
    assert r.json()["message"] == "Invalid or expired token"


def test_junk_token_under_other_scheme_is_forbidden(client):
    r = client.get("/api/resume/list", headers={"Authorization": "Basic not-a-jwt"})
    assert r.status_code == 403
    assert r.json()["message"] == "Invalid or expired token"


def test_me_accepts_valid_token_under_other_scheme(client, test_user):
    token = create_access_token(data={"sub": str(test_user.id), "email": test_user.email})
    r = client.get("/api/auth/me", headers={"Authorization": f"Token {token}"})
    assert r.status_code == 200


def test_me_scheme_without_token_is_missing(client):
    r = client.get("/api/auth/me", headers={"Authorization": "Basic"})
    assert r.status_code == 401


def test_me_rejects_expired_token(client, test_user):
    token = create_access_token(
        data={"sub": str(test_user.id), "email": test_user.email},
        expires_delta=timedelta(minutes=-1),
    )
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403


def test_me_never_exposes_password_hash(client, auth_headers):
    r = client.get("/api/auth/me", headers=auth_headers)
    assert r.status_code == 200
    user = r.json()["data"]["user"]
    assert user["email"] == "alice@example.com"
    assert "hashed_password" not in user
    assert "password" not in user
    assert "hashedPassword" not in user


def test_me_for_deleted_user_is_not_found(client, db_session, test_user, auth_headers):
    db_session.delete(test_user)
    db_session.commit()
    r = client.get("/api/auth/me", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"
