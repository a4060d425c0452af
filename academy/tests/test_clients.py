from __future__ import annotations

import httpx
import pytest

from academy.clients.github import GitHubClient
from academy.clients.identity_provider import IdentityProviderClient, IdentityProviderError
from academy.core.config import get_settings


def test_password_sign_in_returns_session(identity_provider, auth_service):
    auth_service.on(
        "POST",
        "/auth/v1/token",
        json={"access_token": "at", "refresh_token": "rt", "expires_in": 3600, "user": {"id": "u1"}},
    )

    session = identity_provider.sign_in_with_password("ada@example.com", "pw")

    assert session.access_token == "at"
    assert session.user == {"id": "u1"}
    [call] = auth_service.calls("POST", "/auth/v1/token")
    assert call.headers["apikey"] == "anon-key"
    assert call.url.params["grant_type"] == "password"


def test_error_message_taken_from_payload(identity_provider, auth_service):
    auth_service.on("POST", "/auth/v1/token", status_code=400, json={"error_description": "Invalid login credentials"})

    with pytest.raises(IdentityProviderError) as exc:
        identity_provider.sign_in_with_password("ada@example.com", "wrong")

    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid login credentials"


def test_unreachable_service_raises_without_status():
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = IdentityProviderClient(httpx.Client(transport=httpx.MockTransport(boom)), get_settings())

    with pytest.raises(IdentityProviderError) as exc:
        client.get_user("token")

    assert exc.value.status_code is None


def test_delete_user_uses_service_role(identity_provider, auth_service):
    auth_service.on("DELETE", "/auth/v1/admin/users/u1", json={})

    identity_provider.delete_user("u1")

    [call] = auth_service.calls("DELETE", "/auth/v1/admin/users/u1")
    assert call.headers["apikey"] == "service-role-key"
    assert call.headers["Authorization"] == "Bearer service-role-key"


def test_link_identity_without_url_is_an_error(identity_provider, auth_service):
    auth_service.on("GET", "/auth/v1/user/identities/authorize", json={})

    with pytest.raises(IdentityProviderError):
        identity_provider.link_identity_url("token", provider="github", redirect_to="http://academy.test/profile")


def test_github_avatar_lookup(github_client, github_api):
    github_api.on("GET", "/users/adal", json={"avatar_url": "https://avatars.githubusercontent.com/u/1"})

    assert github_client.fetch_avatar_url("adal") == "https://avatars.githubusercontent.com/u/1"
    assert github_client.fetch_avatar_url("missing") is None


def test_github_avatar_lookup_swallows_transport_errors():
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = GitHubClient(httpx.Client(transport=httpx.MockTransport(boom)), api_url="http://github.test")

    assert client.fetch_avatar_url("adal") is None
