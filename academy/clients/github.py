# academy/clients/github.py
from __future__ import annotations

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class GitHubClient:
    """Unauthenticated lookups against the public GitHub REST API."""

    def __init__(self, http: httpx.Client, api_url: str = "https://api.github.com"):
        self.http = http
        self.api_url = api_url.rstrip("/")

    def fetch_avatar_url(self, username: str) -> Optional[str]:
        """
        Best-effort: every failure (network, status, payload) yields None.
        """
        try:
            response = self.http.get(
                f"{self.api_url}/users/{username}",
                headers={"Accept": "application/vnd.github+json"},
            )
            if not response.is_success:
                return None
            avatar_url = response.json().get("avatar_url")
        except Exception as exc:
            logger.debug("github avatar lookup failed", extra={"github_username": username, "error": str(exc)})
            return None

        return avatar_url if isinstance(avatar_url, str) and avatar_url else None
