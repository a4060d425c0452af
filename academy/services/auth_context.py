# academy/services/auth_context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from academy.core.principal import Principal
from academy.models.participant import Participant
from academy.services.identity_service import IdentityResolver

STATUS_APPROVED = "approved"
STATUS_NO_PROFILE = "no_profile"

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AuthContext:
    """
    Per-request view of who is calling: principal, resolved participant and
    admin flags. Built once per request, never shared between requests.
    """
    principal: Optional[Principal] = None
    participant: Optional[Participant] = None
    is_actual_admin: bool = False
    view_as_user: bool = False
    user_status: Optional[str] = None
    link_performed: bool = False

    @classmethod
    def anonymous(cls, view_as_user: bool = False) -> "AuthContext":
        return cls(view_as_user=view_as_user)

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    @property
    def is_admin(self) -> bool:
        # an admin previewing the app as a regular participant loses admin rights
        return self.is_actual_admin and not self.view_as_user


def parse_view_as_user(raw: Optional[str]) -> bool:
    return bool(raw) and raw.strip().lower() in TRUTHY


def build_auth_context(
    db: Session,
    principal: Optional[Principal],
    *,
    view_as_user: bool = False,
) -> AuthContext:
    if principal is None:
        return AuthContext.anonymous(view_as_user=view_as_user)

    resolver = IdentityResolver(db)
    resolution = resolver.resolve(principal)

    if resolution.participant is not None:
        user_status = STATUS_APPROVED
        is_actual_admin = bool(resolution.participant.is_admin)
    else:
        user_status = STATUS_NO_PROFILE
        is_actual_admin = False

    if resolver.is_admin_user(principal.user_id):
        is_actual_admin = True
        user_status = STATUS_APPROVED

    return AuthContext(
        principal=principal,
        participant=resolution.participant,
        is_actual_admin=is_actual_admin,
        view_as_user=view_as_user,
        user_status=user_status,
        link_performed=resolution.link_performed,
    )


def serialize_participant(p: Participant) -> Dict[str, Any]:
    return {
        "id": str(p.id),
        "name": p.name,
        "nickname": p.nickname,
        "email": p.email,
        "role": p.role,
        "team": p.team,
        "stream": p.stream,
        "github_username": p.github_username,
        "avatar_url": p.avatar_url,
        "repo_url": p.repo_url,
        "auth_user_id": str(p.auth_user_id) if p.auth_user_id else None,
        "status": p.status,
        "is_admin": p.is_admin,
        "receive_notifications": p.receive_notifications,
    }


def serialize_context(ctx: AuthContext) -> Dict[str, Any]:
    user = None
    if ctx.principal is not None:
        user = {
            "id": ctx.principal.user_id,
            "email": ctx.principal.email,
            "github_username": ctx.principal.github_username,
            "full_name": ctx.principal.full_name,
        }
    return {
        "user": user,
        "participant": serialize_participant(ctx.participant) if ctx.participant else None,
        "is_admin": ctx.is_admin,
        "is_actual_admin": ctx.is_actual_admin,
        "view_as_user": ctx.view_as_user,
        "user_status": ctx.user_status,
    }
