from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ProfileView(BaseModel):
    id: str
    name: str
    nickname: str
    email: str
    role: str
    role_description: Optional[str] = None
    team: str
    stream: str
    avatar_url: Optional[str] = None
    status: str
    is_admin: bool = False
    joined_at: Optional[datetime] = None
    receive_notifications: bool = True

    github_connected: bool = False
    github_username: Optional[str] = None
    github_profile_url: Optional[str] = None
    repo_url: Optional[str] = None
    webhook_url: str


class LinkIdentityResponse(BaseModel):
    provider: str
    url: str
