# academy/models/participant.py

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, Uuid, func, true
from sqlalchemy.orm import Mapped, mapped_column

from academy.db.base import Base
from academy.models.enums import ParticipantStatus


class Participant(Base):
    __tablename__ = "participants"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    nickname: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)

    role: Mapped[str] = mapped_column(String(16), nullable=False)
    team: Mapped[str] = mapped_column(String(16), nullable=False)
    stream: Mapped[str] = mapped_column(String(16), nullable=False)

    # GitHub is optional and may be linked later from the profile page
    github_username: Mapped[Optional[str]] = mapped_column(String(39), nullable=True, unique=True)
    avatar_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    repo_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    # id of the hosted-auth principal linked to this participant
    auth_user_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True, unique=True)

    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ParticipantStatus.approved.value
    )
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    receive_notifications: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
