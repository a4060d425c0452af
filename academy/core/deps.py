# academy/core/deps.py
from __future__ import annotations

from typing import Iterator, Optional

import httpx
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from academy.clients.github import GitHubClient
from academy.clients.identity_provider import IdentityProviderClient
from academy.core.auth_deps import get_optional_principal
from academy.core.config import Settings, get_settings
from academy.core.principal import Principal
from academy.db.session import get_db
from academy.services.auth_context import AuthContext, build_auth_context, parse_view_as_user

VIEW_AS_USER_HEADER = "X-View-As-User"


def get_http_client(settings: Settings = Depends(get_settings)) -> Iterator[httpx.Client]:
    with httpx.Client(timeout=settings.http_timeout_seconds) as client:
        yield client


def get_identity_provider(
    http: httpx.Client = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> IdentityProviderClient:
    return IdentityProviderClient(http, settings)


def get_github_client(
    http: httpx.Client = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> GitHubClient:
    return GitHubClient(http, api_url=settings.github_api_url)


def get_auth_context(
    request: Request,
    db: Session = Depends(get_db),
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> AuthContext:
    ctx = build_auth_context(
        db,
        principal,
        view_as_user=parse_view_as_user(request.headers.get(VIEW_AS_USER_HEADER)),
    )
    request.state.auth_context = ctx
    return ctx
