from __future__ import annotations

from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field


class OnboardingForm(BaseModel):
    name: str = ""
    nickname: str = ""
    email: str = ""
    role: str = ""
    team: str = ""
    stream: str = ""
    avatar_color: str = "0062FF"


class TransitionRequest(BaseModel):
    step: str
    direction: Literal["next", "back"]
    form: OnboardingForm = Field(default_factory=OnboardingForm)


class TransitionResponse(BaseModel):
    step: str
    avatar_url: str


class OnboardingStartResponse(BaseModel):
    redirect_to: Optional[str] = None
    step: Optional[str] = None
    form: Optional[OnboardingForm] = None
    options: Optional[Dict[str, Dict[str, str]]] = None
