# academy/models/participant_mastery.py
from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from academy.db.base import Base
from academy.models.enums import ClearanceLevel


class ParticipantMastery(Base):
    __tablename__ = "participant_mastery"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    participant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("participants.id"), nullable=False, unique=True
    )

    mastery_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    clearance: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ClearanceLevel.RECRUIT.value
    )
    days_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    artifacts_submitted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    ai_tutor_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    peer_assists_given: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
