# academy/services/identity_service.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from academy.core.principal import Principal
from academy.models.admin_user import AdminUser
from academy.models.participant import Participant

logger = logging.getLogger(__name__)


MATCHED_BY_AUTH_USER_ID = "auth_user_id"
MATCHED_BY_EMAIL = "email"
MATCHED_BY_GITHUB_USERNAME = "github_username"


@dataclass(frozen=True)
class Resolution:
    participant: Optional[Participant]
    link_performed: bool = False
    matched_by: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.participant is not None


def _as_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class IdentityResolver:
    """
    Maps an authenticated principal onto its local participant row.

    Lookup order (first match wins):
    1. linked principal id
    2. email, linking the principal if the row is unlinked
    3. GitHub username, linking the principal if the row is unlinked
    """

    def __init__(self, db: Session):
        self.db = db

    # ─────────────────────────────────────────────
    # INTERNAL READ HELPERS
    # ─────────────────────────────────────────────

    def _first(self, *criteria) -> Optional[Participant]:
        return self.db.execute(select(Participant).where(*criteria).limit(1)).scalar_one_or_none()

    def _link(self, participant: Participant, user_id: uuid.UUID) -> bool:
        if participant.auth_user_id is not None:
            return False
        try:
            participant.auth_user_id = user_id
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning(
                "failed to link participant to auth user",
                extra={"participant_id": str(participant.id), "user_id": str(user_id)},
                exc_info=True,
            )
            return False

        logger.info(
            "participant linked to auth user",
            extra={"participant_id": str(participant.id), "user_id": str(user_id)},
        )
        return True

    # ─────────────────────────────────────────────
    # LOOKUPS
    # ─────────────────────────────────────────────

    def resolve(self, principal: Principal) -> Resolution:
        user_id = _as_uuid(principal.user_id)

        if user_id is not None:
            found = self._first(Participant.auth_user_id == user_id)
            if found:
                return Resolution(found, matched_by=MATCHED_BY_AUTH_USER_ID)

        if principal.email:
            found = self._first(Participant.email == principal.email)
            if found:
                linked = self._link(found, user_id) if user_id is not None else False
                return Resolution(found, link_performed=linked, matched_by=MATCHED_BY_EMAIL)

        if principal.github_username:
            found = self._first(Participant.github_username == principal.github_username)
            if found:
                linked = self._link(found, user_id) if user_id is not None else False
                return Resolution(found, link_performed=linked, matched_by=MATCHED_BY_GITHUB_USERNAME)

        return Resolution(None)

    def find_owned_participant(self, principal: Principal) -> Optional[Participant]:
        """
        Single-query ownership lookup used by account deletion: linked id or email.
        No link-back.
        """
        criteria = []
        user_id = _as_uuid(principal.user_id)
        if user_id is not None:
            criteria.append(Participant.auth_user_id == user_id)
        if principal.email:
            criteria.append(Participant.email == principal.email)
        if not criteria:
            return None
        return self._first(or_(*criteria))

    def is_admin_user(self, user_id: str) -> bool:
        uid = _as_uuid(user_id)
        if uid is None:
            return False
        row = self.db.execute(
            select(AdminUser.id).where(AdminUser.user_id == uid, AdminUser.is_active.is_(True))
        ).first()
        return row is not None
