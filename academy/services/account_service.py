# academy/services/account_service.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from academy.clients.identity_provider import IdentityProviderClient, IdentityProviderError
from academy.core.errors import InternalError
from academy.core.principal import Principal
from academy.models.activity_log import ActivityLog
from academy.models.comment import Comment
from academy.models.leaderboard import LeaderboardEntry
from academy.models.participant import Participant
from academy.models.participant_achievement import ParticipantAchievement
from academy.models.participant_mastery import ParticipantMastery
from academy.models.participant_recognition import ParticipantRecognition
from academy.models.peer_review import PeerReview
from academy.models.submission import Submission
from academy.models.task_force_member import TaskForceMember
from academy.services.identity_service import IdentityResolver

logger = logging.getLogger(__name__)


# Owned collections in deletion order, paired with the owning column.
# Children go first so foreign keys on participants.id are released.
CASCADE_ORDER: Tuple[Tuple[type, str], ...] = (
    (Submission, "participant_id"),
    (PeerReview, "reviewer_id"),
    (ParticipantAchievement, "participant_id"),
    (LeaderboardEntry, "participant_id"),
    (ParticipantMastery, "participant_id"),
    (TaskForceMember, "participant_id"),
    (ParticipantRecognition, "participant_id"),
    (ActivityLog, "participant_id"),
    (Comment, "author_id"),
)


@dataclass
class DeletionReport:
    user_id: str
    participant_id: Optional[uuid.UUID] = None
    failed_tables: List[str] = field(default_factory=list)


class AccountService:
    """
    Account deletion. The cascade is at-least-once-attempted, not atomic:
    each statement commits on its own and a failing table does not stop the
    remaining ones, so orphaned rows are possible.
    """

    def __init__(self, db: Session, identity_provider: IdentityProviderClient):
        self.db = db
        self.identity_provider = identity_provider
        self.resolver = IdentityResolver(db)

    def _run(self, report: DeletionReport, table: str, stmt, participant_id: uuid.UUID) -> bool:
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            report.failed_tables.append(table)
            logger.warning(
                "cascade delete failed",
                extra={"table": table, "participant_id": str(participant_id)},
                exc_info=True,
            )
            return False
        return True

    def _delete_where(self, report: DeletionReport, model: type, column: str, value: uuid.UUID) -> bool:
        stmt = delete(model).where(getattr(model, column) == value)
        return self._run(report, model.__tablename__, stmt, value)

    def purge_participant(self, participant_id: uuid.UUID, report: DeletionReport) -> bool:
        """
        Returns False when the participant row itself survived.
        """
        # reviews written by others on this participant's submissions
        own_submissions = select(Submission.id).where(Submission.participant_id == participant_id)
        self._run(
            report,
            PeerReview.__tablename__,
            delete(PeerReview).where(PeerReview.submission_id.in_(own_submissions)),
            participant_id,
        )
        for model, column in CASCADE_ORDER:
            self._delete_where(report, model, column, participant_id)
        return self._delete_where(report, Participant, "id", participant_id)

    def delete_account(self, principal: Principal) -> DeletionReport:
        report = DeletionReport(user_id=principal.user_id)

        participant = self.resolver.find_owned_participant(principal)
        if participant is not None:
            report.participant_id = participant.id
            if not self.purge_participant(participant.id, report):
                # the principal outlives its participant row only on auth failure
                logger.error(
                    "participant row not deleted",
                    extra={
                        "user_id": principal.user_id,
                        "participant_id": str(participant.id),
                        "failed_tables": report.failed_tables,
                    },
                )
                raise InternalError("Failed to delete account")

        try:
            self.identity_provider.delete_user(principal.user_id)
        except IdentityProviderError as exc:
            logger.error(
                "failed to delete auth user",
                extra={"user_id": principal.user_id, "status_code": exc.status_code, "error": exc.message},
            )
            raise InternalError("Failed to delete account")

        logger.info(
            "user account deleted",
            extra={
                "user_id": principal.user_id,
                "email": principal.email,
                "participant_id": str(report.participant_id) if report.participant_id else None,
                "failed_tables": report.failed_tables,
            },
        )
        return report
