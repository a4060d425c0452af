# academy/core/principal.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Principal:
    """
    Authenticated identity issued by the hosted auth service.
    Never stored locally; rebuilt from the verified access token on each request.
    """
    user_id: str
    email: Optional[str]
    github_username: Optional[str]
    full_name: Optional[str]
    access_token: str

    @classmethod
    def from_claims(cls, claims: Dict[str, Any], access_token: str) -> "Principal":
        metadata = claims.get("user_metadata") or {}
        return cls(
            user_id=str(claims["sub"]),
            email=claims.get("email") or None,
            github_username=metadata.get("user_name") or None,
            full_name=metadata.get("full_name") or metadata.get("name") or None,
            access_token=access_token,
        )
