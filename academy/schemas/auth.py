from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class MagicLinkRequest(BaseModel):
    email: EmailStr


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: str = "bearer"


class AuthContextResponse(BaseModel):
    user: Optional[Dict[str, Any]] = None
    participant: Optional[Dict[str, Any]] = None
    is_admin: bool = False
    is_actual_admin: bool = False
    view_as_user: bool = False
    user_status: Optional[str] = None
