# academy/api/profile.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from academy.clients.identity_provider import IdentityProviderClient, IdentityProviderError
from academy.core.auth_deps import get_current_principal
from academy.core.config import Settings, get_settings
from academy.core.deps import get_auth_context, get_identity_provider
from academy.core.errors import InternalError
from academy.schemas.profile import LinkIdentityResponse, ProfileView
from academy.services.auth_context import AuthContext
from academy.services.profile_service import build_profile_view, start_github_link

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", dependencies=[Depends(get_current_principal)])


@router.get("", response_model=ProfileView)
def get_profile(
    ctx: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_settings),
):
    return build_profile_view(ctx, settings)


@router.post("/github/link", response_model=LinkIdentityResponse)
def link_github(
    ctx: AuthContext = Depends(get_auth_context),
    identity_provider: IdentityProviderClient = Depends(get_identity_provider),
    settings: Settings = Depends(get_settings),
):
    try:
        return start_github_link(ctx, identity_provider, settings)
    except IdentityProviderError as exc:
        logger.error(
            "github identity link failed",
            extra={"user_id": ctx.principal.user_id if ctx.principal else None, "error": exc.message},
        )
        raise InternalError("Failed to connect GitHub")
