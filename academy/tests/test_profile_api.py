from __future__ import annotations

import uuid

from conftest import add_participant, bearer, make_token


def test_profile_requires_session(client):
    r = client.get("/api/profile")
    assert r.status_code == 401


def test_profile_not_found_without_participant(client):
    r = client.get("/api/profile", headers=bearer(make_token(email="ghost@example.com")))
    assert r.status_code == 404
    assert r.json() == {"error": "Profile not found"}


def test_profile_view(client, db):
    user_id = uuid.uuid4()
    p = add_participant(
        db,
        auth_user_id=user_id,
        github_username="adal",
        repo_url="https://github.com/adal/ai-academy-2026",
    )

    r = client.get("/api/profile", headers=bearer(make_token(str(user_id))))

    assert r.status_code == 200, r.text
    body = r.json()
    assert body["id"] == str(p.id)
    assert body["nickname"] == "ada"
    assert body["role_description"] == "AI Software Engineer"
    assert body["github_connected"] is True
    assert body["github_profile_url"] == "https://github.com/adal"
    assert body["repo_url"] == "https://github.com/adal/ai-academy-2026"
    assert body["webhook_url"] == "http://academy.test/api/webhook/github"
    assert body["receive_notifications"] is True


def test_link_github_returns_authorization_url(client, db, auth_service):
    user_id = uuid.uuid4()
    add_participant(db, auth_user_id=user_id)
    token = make_token(str(user_id))
    auth_service.on(
        "GET",
        "/auth/v1/user/identities/authorize",
        json={"url": "https://github.com/login/oauth/authorize?client_id=abc"},
    )

    r = client.post("/api/profile/github/link", headers=bearer(token))

    assert r.status_code == 200, r.text
    assert r.json() == {"provider": "github", "url": "https://github.com/login/oauth/authorize?client_id=abc"}
    [call] = auth_service.calls("GET", "/auth/v1/user/identities/authorize")
    assert call.url.params["provider"] == "github"
    assert call.url.params["redirect_to"] == "http://academy.test/auth/callback?next=/profile"
    assert call.url.params["scopes"] == "read:user user:email"
    assert call.headers["Authorization"] == f"Bearer {token}"


def test_link_github_when_already_connected(client, db, auth_service):
    user_id = uuid.uuid4()
    add_participant(db, auth_user_id=user_id, github_username="adal")

    r = client.post("/api/profile/github/link", headers=bearer(make_token(str(user_id))))

    assert r.status_code == 400
    assert r.json()["error"] == "GitHub account already connected"
    assert auth_service.requests == []


def test_link_github_provider_failure(client, db, auth_service):
    user_id = uuid.uuid4()
    add_participant(db, auth_user_id=user_id)
    auth_service.on("GET", "/auth/v1/user/identities/authorize", status_code=422, json={"msg": "Manual linking is disabled"})

    r = client.post("/api/profile/github/link", headers=bearer(make_token(str(user_id))))

    assert r.status_code == 500
    assert r.json() == {"error": "Failed to connect GitHub"}


def test_profile_reports_disabled_notifications(client, db):
    user_id = uuid.uuid4()
    add_participant(db, auth_user_id=user_id, receive_notifications=False)

    r = client.get("/api/profile", headers=bearer(make_token(str(user_id))))

    assert r.status_code == 200
    assert r.json()["receive_notifications"] is False
