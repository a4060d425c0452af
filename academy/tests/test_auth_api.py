from __future__ import annotations

import json
import uuid

from academy.models.admin_user import AdminUser
from academy.models.participant import Participant
from conftest import add_participant, bearer, make_token


def test_me_anonymous(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 200
    body = r.json()
    assert body["user"] is None
    assert body["participant"] is None
    assert body["user_status"] is None
    assert body["is_admin"] is False


def test_me_without_profile(client):
    r = client.get("/api/auth/me", headers=bearer(make_token(email="new@example.com", full_name="New Person")))
    body = r.json()
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["full_name"] == "New Person"
    assert body["participant"] is None
    assert body["user_status"] == "no_profile"


def test_me_resolves_and_links_participant_by_email(client, db):
    p = add_participant(db)
    user_id = uuid.uuid4()

    r = client.get("/api/auth/me", headers=bearer(make_token(str(user_id), email="ada@example.com")))

    body = r.json()
    assert body["user_status"] == "approved"
    assert body["participant"]["id"] == str(p.id)
    assert body["participant"]["auth_user_id"] == str(user_id)
    db.expire_all()
    assert db.get(Participant, p.id).auth_user_id == user_id


def test_me_resolves_github_oauth_user(client, db):
    p = add_participant(db, github_username="adal")

    r = client.get("/api/auth/me", headers=bearer(make_token(user_name="adal")))

    assert r.json()["participant"]["id"] == str(p.id)


def test_admin_membership_without_participant(client, db):
    user_id = uuid.uuid4()
    db.add(AdminUser(user_id=user_id, is_active=True))
    db.commit()

    r = client.get("/api/auth/me", headers=bearer(make_token(str(user_id), email="boss@example.com")))

    body = r.json()
    assert body["participant"] is None
    assert body["is_actual_admin"] is True
    assert body["is_admin"] is True
    assert body["user_status"] == "approved"


def test_participant_admin_flag_and_view_as_user(client, db):
    user_id = uuid.uuid4()
    add_participant(db, auth_user_id=user_id, is_admin=True)
    token = make_token(str(user_id))

    assert client.get("/api/auth/me", headers=bearer(token)).json()["is_admin"] is True

    r = client.get("/api/auth/me", headers={**bearer(token), "X-View-As-User": "true"})
    body = r.json()
    assert body["is_actual_admin"] is True
    assert body["is_admin"] is False
    assert body["view_as_user"] is True


def test_me_rejects_invalid_token(client):
    r = client.get("/api/auth/me", headers=bearer("garbage"))
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid or expired token."


def test_login_returns_session_tokens(client, auth_service):
    auth_service.on(
        "POST",
        "/auth/v1/token",
        json={"access_token": "at", "refresh_token": "rt", "expires_in": 3600, "user": {"id": "u1"}},
    )

    r = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "s3cret"})

    assert r.status_code == 200, r.text
    assert r.json() == {"access_token": "at", "refresh_token": "rt", "expires_in": 3600, "token_type": "bearer"}
    [call] = auth_service.calls("POST", "/auth/v1/token")
    assert call.url.params["grant_type"] == "password"
    assert call.headers["apikey"] == "anon-key"
    assert json.loads(call.content) == {"email": "ada@example.com", "password": "s3cret"}


def test_login_bad_credentials(client, auth_service):
    auth_service.on("POST", "/auth/v1/token", status_code=400, json={"error_description": "Invalid login credentials"})

    r = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "nope"})

    assert r.status_code == 401
    assert r.json() == {"error": "Invalid login credentials"}


def test_magic_link_sends_redirect(client, auth_service):
    auth_service.on("POST", "/auth/v1/otp")

    r = client.post("/api/auth/magic-link", json={"email": "ada@example.com"})

    assert r.status_code == 200
    [call] = auth_service.calls("POST", "/auth/v1/otp")
    assert call.url.params["redirect_to"] == "http://academy.test/auth/callback"
    assert json.loads(call.content)["email"] == "ada@example.com"


def test_magic_link_failure_is_internal_error(client, auth_service):
    auth_service.on("POST", "/auth/v1/otp", status_code=503, json={"msg": "unavailable"})

    r = client.post("/api/auth/magic-link", json={"email": "ada@example.com"})

    assert r.status_code == 500
    assert r.json() == {"error": "Failed to send magic link"}


def test_logout_returns_anonymous_context(client, db, auth_service):
    user_id = uuid.uuid4()
    add_participant(db, auth_user_id=user_id, is_admin=True)
    token = make_token(str(user_id))
    auth_service.on("POST", "/auth/v1/logout", status_code=204)

    r = client.post("/api/auth/logout", headers=bearer(token))

    assert r.status_code == 200
    body = r.json()
    assert body["user"] is None
    assert body["participant"] is None
    assert body["is_actual_admin"] is False
    assert body["user_status"] is None
    [call] = auth_service.calls("POST", "/auth/v1/logout")
    assert call.headers["Authorization"] == f"Bearer {token}"
