# academy/api/register.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from academy.clients.github import GitHubClient
from academy.core.config import Settings, get_settings
from academy.core.deps import get_github_client
from academy.core.logging import log_tracked_request, track_api_request
from academy.db.session import get_db
from academy.schemas.registration import RegisterRequest, RegisterResponse
from academy.services.registration_service import RegistrationService

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, dependencies=[Depends(track_api_request)])
def register(
    request: Request,
    req: RegisterRequest,
    db: Session = Depends(get_db),
    github: GitHubClient = Depends(get_github_client),
    settings: Settings = Depends(get_settings),
):
    participant_id = RegistrationService(db, github, settings).register(
        req, correlation_id=getattr(request.state, "request_id", None)
    )

    log_tracked_request(request, 200)
    return RegisterResponse(success=True, participant_id=str(participant_id))
