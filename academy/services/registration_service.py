# academy/services/registration_service.py
from __future__ import annotations

import logging
import uuid
from typing import Optional
from urllib.parse import urlencode

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from academy.clients.github import GitHubClient
from academy.core.config import Settings
from academy.core.errors import ConflictError, InternalError
from academy.models.enums import ClearanceLevel, ParticipantStatus
from academy.models.leaderboard import LeaderboardEntry
from academy.models.participant import Participant
from academy.models.participant_mastery import ParticipantMastery
from academy.schemas.registration import RegisterRequest

logger = logging.getLogger(__name__)


def name_initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part)[:2]


def placeholder_avatar_url(name: str, *, base_url: str, background: str = "random") -> str:
    query = urlencode({"name": name_initials(name), "background": background, "size": 200})
    return f"{base_url}?{query}"


class RegistrationService:
    def __init__(self, db: Session, github: GitHubClient, settings: Settings):
        self.db = db
        self.github = github
        self.settings = settings

    # ─────────────────────────────────────────────
    # STEPS
    # ─────────────────────────────────────────────

    def find_duplicate(self, req: RegisterRequest) -> Optional[uuid.UUID]:
        criteria = [Participant.email == req.email]
        if req.github_username:
            criteria.append(Participant.github_username == req.github_username)

        return self.db.execute(
            select(Participant.id).where(or_(*criteria)).limit(1)
        ).scalar_one_or_none()

    def resolve_avatar(self, req: RegisterRequest) -> str:
        """
        explicit url -> GitHub avatar -> initials placeholder
        """
        if req.avatar_url:
            return req.avatar_url

        if req.github_username:
            fetched = self.github.fetch_avatar_url(req.github_username)
            if fetched:
                return fetched

        return placeholder_avatar_url(req.name, base_url=self.settings.avatar_service_url)

    def repo_url_for(self, github_username: Optional[str]) -> Optional[str]:
        if not github_username:
            return None
        return f"https://github.com/{github_username}/{self.settings.github_repo_name}"

    def _initialize_records(self, participant_id: uuid.UUID) -> None:
        # not rolled back with the participant: a failure leaves a participant
        # without progress rows until they are backfilled
        initial_rows = (
            LeaderboardEntry(
                participant_id=participant_id,
                total_points=0,
                total_submissions=0,
                on_time_submissions=0,
                current_streak=0,
                rank=None,
            ),
            ParticipantMastery(
                participant_id=participant_id,
                mastery_level=1,
                clearance=ClearanceLevel.RECRUIT.value,
                days_completed=0,
                artifacts_submitted=0,
                ai_tutor_sessions=0,
                peer_assists_given=0,
            ),
        )
        for row in initial_rows:
            try:
                self.db.add(row)
                self.db.commit()
            except SQLAlchemyError:
                self.db.rollback()
                logger.warning(
                    "failed to initialize participant record",
                    extra={"participant_id": str(participant_id), "table": row.__tablename__},
                    exc_info=True,
                )

    # ─────────────────────────────────────────────
    # ENTRYPOINT
    # ─────────────────────────────────────────────

    def register(self, req: RegisterRequest, *, correlation_id: Optional[str] = None) -> uuid.UUID:
        if self.find_duplicate(req) is not None:
            logger.info(
                "registration attempt with existing credentials",
                extra={
                    "correlation_id": correlation_id,
                    "github_username": req.github_username,
                    "email": req.email,
                },
            )
            raise ConflictError("Email already registered")

        participant = Participant(
            github_username=req.github_username,
            name=req.name,
            nickname=req.nickname,
            email=req.email,
            role=req.role.value,
            team=req.team.value,
            stream=req.stream.value,
            avatar_url=self.resolve_avatar(req),
            repo_url=self.repo_url_for(req.github_username),
            auth_user_id=req.auth_user_id,
            status=ParticipantStatus.approved.value,
        )

        try:
            self.db.add(participant)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(
                "registration hit a unique constraint",
                extra={"correlation_id": correlation_id, "nickname": req.nickname, "email": req.email},
            )
            raise ConflictError("Nickname or account already registered")
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(
                "registration failed",
                extra={"correlation_id": correlation_id, "email": req.email},
                exc_info=True,
            )
            raise InternalError("Registration failed")

        self._initialize_records(participant.id)

        logger.info(
            "new participant registered",
            extra={
                "correlation_id": correlation_id,
                "participant_id": str(participant.id),
                "nickname": req.nickname,
                "email": req.email,
                "role": req.role.value,
                "team": req.team.value,
                "has_github": bool(req.github_username),
            },
        )
        return participant.id
