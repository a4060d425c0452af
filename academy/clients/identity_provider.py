# academy/clients/identity_provider.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from academy.core.config import Settings

logger = logging.getLogger(__name__)


class IdentityProviderError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    refresh_token: Optional[str]
    expires_in: Optional[int]
    user: Dict[str, Any]


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or f"status {response.status_code}"

    if isinstance(payload, Mapping):
        for key in ("msg", "error_description", "message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return f"status {response.status_code}"


class IdentityProviderClient:
    """
    Thin wrapper over the hosted auth REST API (GoTrue-compatible, under /auth/v1).

    User-scoped calls carry the caller's access token; admin calls carry the
    service role key and must only be made server-side.
    """

    def __init__(self, http: httpx.Client, settings: Settings):
        self.http = http
        self.base_url = settings.supabase_url.rstrip("/") + "/auth/v1"
        self.anon_key = settings.supabase_anon_key
        self.service_role_key = settings.supabase_service_role_key

    # ─────────────────────────────────────────────
    # INTERNAL
    # ─────────────────────────────────────────────

    def _headers(self, bearer: Optional[str] = None, *, admin: bool = False) -> Dict[str, str]:
        api_key = self.service_role_key if admin else self.anon_key
        return {
            "apikey": api_key,
            "Authorization": f"Bearer {bearer or api_key}",
        }

    def _request(
        self,
        method: str,
        path: str,
        *,
        headers: Dict[str, str],
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = self.http.request(
                method, f"{self.base_url}{path}", headers=headers, params=params, json=json
            )
        except httpx.HTTPError as exc:
            raise IdentityProviderError(f"auth service unreachable: {exc}") from exc

        if not response.is_success:
            raise IdentityProviderError(_error_message(response), status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # ─────────────────────────────────────────────
    # SESSIONS
    # ─────────────────────────────────────────────

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        data = self._request(
            "POST",
            "/token",
            headers=self._headers(),
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return AuthSession(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            user=data.get("user") or {},
        )

    def sign_in_with_magic_link(self, email: str, redirect_to: str) -> None:
        self._request(
            "POST",
            "/otp",
            headers=self._headers(),
            params={"redirect_to": redirect_to},
            json={"email": email, "create_user": True},
        )

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/logout", headers=self._headers(access_token))

    def get_user(self, access_token: str) -> Dict[str, Any]:
        return self._request("GET", "/user", headers=self._headers(access_token)) or {}

    # ─────────────────────────────────────────────
    # IDENTITY LINKING
    # ─────────────────────────────────────────────

    def link_identity_url(
        self,
        access_token: str,
        provider: str,
        redirect_to: str,
        scopes: Optional[str] = None,
    ) -> str:
        """
        Ask the auth service for the provider authorization URL that links a new
        identity to the signed-in user. The OAuth exchange itself never
        passes through this service.
        """
        params: Dict[str, Any] = {
            "provider": provider,
            "redirect_to": redirect_to,
            "skip_http_redirect": "true",
        }
        if scopes:
            params["scopes"] = scopes
        data = self._request(
            "GET",
            "/user/identities/authorize",
            headers=self._headers(access_token),
            params=params,
        )
        url = (data or {}).get("url")
        if not url:
            raise IdentityProviderError("auth service returned no authorization url")
        return url

    # ─────────────────────────────────────────────
    # ADMIN
    # ─────────────────────────────────────────────

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/admin/users/{user_id}", headers=self._headers(admin=True))
        logger.info("auth user deleted", extra={"user_id": user_id})
