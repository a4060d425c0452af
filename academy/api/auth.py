# academy/api/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from academy.clients.identity_provider import IdentityProviderClient, IdentityProviderError
from academy.core.auth_deps import get_current_principal
from academy.core.config import Settings, get_settings
from academy.core.deps import get_auth_context, get_identity_provider
from academy.core.errors import InternalError, UnauthorizedError
from academy.core.principal import Principal
from academy.schemas.auth import AuthContextResponse, LoginRequest, MagicLinkRequest, TokenResponse
from academy.services.auth_context import AuthContext, serialize_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=TokenResponse)
def login(
    req: LoginRequest,
    identity_provider: IdentityProviderClient = Depends(get_identity_provider),
):
    try:
        session = identity_provider.sign_in_with_password(req.email, req.password)
    except IdentityProviderError as exc:
        if exc.status_code is not None and exc.status_code < 500:
            raise UnauthorizedError("Invalid login credentials")
        logger.error("password sign-in failed", extra={"email": req.email, "error": exc.message})
        raise InternalError()

    return TokenResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
    )


@router.post("/magic-link")
def magic_link(
    req: MagicLinkRequest,
    identity_provider: IdentityProviderClient = Depends(get_identity_provider),
    settings: Settings = Depends(get_settings),
):
    redirect_to = f"{settings.public_base_url.rstrip('/')}/auth/callback"
    try:
        identity_provider.sign_in_with_magic_link(req.email, redirect_to=redirect_to)
    except IdentityProviderError as exc:
        logger.error("magic link request failed", extra={"email": req.email, "error": exc.message})
        raise InternalError("Failed to send magic link")

    return {"success": True}


@router.post("/logout", response_model=AuthContextResponse)
def logout(
    principal: Principal = Depends(get_current_principal),
    identity_provider: IdentityProviderClient = Depends(get_identity_provider),
):
    try:
        identity_provider.sign_out(principal.access_token)
    except IdentityProviderError as exc:
        # the session is dropped client-side either way
        logger.warning("sign-out failed", extra={"user_id": principal.user_id, "error": exc.message})

    return serialize_context(AuthContext.anonymous())


@router.get("/me", response_model=AuthContextResponse)
def get_me(ctx: AuthContext = Depends(get_auth_context)):
    return serialize_context(ctx)
