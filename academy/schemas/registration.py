# academy/schemas/registration.py
from __future__ import annotations

import re
import uuid
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from academy.models.enums import RoleType, StreamType, TeamType

NICKNAME_RE = re.compile(r"^[a-z0-9_-]{2,30}$")
GITHUB_USERNAME_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$")


class RegisterRequest(BaseModel):
    github_username: Optional[str] = Field(default=None, max_length=39)
    name: str = Field(..., min_length=1, max_length=120)
    nickname: str
    email: EmailStr
    role: RoleType
    team: TeamType
    stream: StreamType
    avatar_url: Optional[str] = Field(default=None, max_length=512)
    auth_user_id: Optional[uuid.UUID] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("nickname")
    @classmethod
    def _nickname_pattern(cls, v: str) -> str:
        if not NICKNAME_RE.match(v):
            raise ValueError(
                "Nickname must be 2-30 characters: lowercase letters, numbers, _ and - only"
            )
        return v

    @field_validator("github_username")
    @classmethod
    def _github_username(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if not GITHUB_USERNAME_RE.match(v):
            raise ValueError("Invalid GitHub username")
        return v

    @field_validator("avatar_url")
    @classmethod
    def _avatar_url(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("Avatar URL must be an http(s) URL")
        return v


class RegisterResponse(BaseModel):
    success: bool = True
    participant_id: str
