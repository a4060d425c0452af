# academy/services/profile_service.py
from __future__ import annotations

from academy.clients.identity_provider import IdentityProviderClient
from academy.core.config import Settings
from academy.core.errors import NotFoundError, UnauthorizedError, ValidationError
from academy.models.enums import ROLE_DESCRIPTIONS, RoleType
from academy.schemas.profile import LinkIdentityResponse, ProfileView
from academy.services.auth_context import AuthContext

GITHUB_PROVIDER = "github"
GITHUB_LINK_SCOPES = "read:user user:email"
PROFILE_PATH = "/profile"


def webhook_url(settings: Settings) -> str:
    return f"{settings.public_base_url.rstrip('/')}{settings.api_prefix}/webhook/github"


def build_profile_view(ctx: AuthContext, settings: Settings) -> ProfileView:
    if not ctx.is_authenticated:
        raise UnauthorizedError()
    p = ctx.participant
    if p is None:
        raise NotFoundError("Profile not found")

    try:
        role_description = ROLE_DESCRIPTIONS[RoleType(p.role)]
    except ValueError:
        role_description = None

    return ProfileView(
        id=str(p.id),
        name=p.name,
        nickname=p.nickname,
        email=p.email,
        role=p.role,
        role_description=role_description,
        team=p.team,
        stream=p.stream,
        avatar_url=p.avatar_url,
        status=p.status,
        is_admin=ctx.is_admin,
        joined_at=p.created_at,
        receive_notifications=p.receive_notifications,
        github_connected=bool(p.github_username),
        github_username=p.github_username,
        github_profile_url=f"https://github.com/{p.github_username}" if p.github_username else None,
        repo_url=p.repo_url,
        webhook_url=webhook_url(settings),
    )


def start_github_link(
    ctx: AuthContext,
    identity_provider: IdentityProviderClient,
    settings: Settings,
) -> LinkIdentityResponse:
    """
    Linking is owned by the auth service; we only hand back its authorization URL.
    """
    if ctx.principal is None:
        raise UnauthorizedError()
    if ctx.participant is not None and ctx.participant.github_username:
        raise ValidationError("GitHub account already connected")

    url = identity_provider.link_identity_url(
        ctx.principal.access_token,
        provider=GITHUB_PROVIDER,
        redirect_to=f"{settings.public_base_url.rstrip('/')}/auth/callback?next={PROFILE_PATH}",
        scopes=GITHUB_LINK_SCOPES,
    )
    return LinkIdentityResponse(provider=GITHUB_PROVIDER, url=url)
