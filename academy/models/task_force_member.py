# academy/models/task_force_member.py
from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from academy.db.base import Base


class TaskForceMember(Base):
    __tablename__ = "task_force_members"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    task_force_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    participant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("participants.id"), nullable=False, index=True
    )
    member_role: Mapped[str] = mapped_column(String(32), nullable=False, default="member")
