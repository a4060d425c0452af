# academy/services/onboarding_wizard.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from academy.core.principal import Principal
from academy.models.enums import ROLE_DESCRIPTIONS, RoleType, StreamType, TeamType
from academy.schemas.onboarding import OnboardingForm
from academy.services.auth_context import AuthContext

DASHBOARD_PATH = "/my-dashboard"
AVATAR_PREVIEW_URL = "https://ui-avatars.com/api/"

NICKNAME_CHARS_RE = re.compile(r"^[a-z0-9_-]+$")
NICKNAME_STRIP_RE = re.compile(r"[^a-z0-9_-]")
NICKNAME_MIN, NICKNAME_MAX = 2, 30

AVATAR_COLORS: Dict[str, str] = {
    "0062FF": "Blue",
    "10B981": "Green",
    "F59E0B": "Amber",
    "EF4444": "Red",
    "8B5CF6": "Purple",
    "EC4899": "Pink",
    "06B6D4": "Cyan",
    "84CC16": "Lime",
}
DEFAULT_AVATAR_COLOR = "0062FF"


class WizardStep(str, Enum):
    welcome = "welcome"
    profile = "profile"
    assignment = "assignment"
    complete = "complete"


NEXT = "next"
BACK = "back"

ALLOWED_TRANSITIONS: Dict[WizardStep, Dict[str, WizardStep]] = {
    WizardStep.welcome: {NEXT: WizardStep.profile},
    WizardStep.profile: {NEXT: WizardStep.assignment, BACK: WizardStep.welcome},
    WizardStep.assignment: {NEXT: WizardStep.complete, BACK: WizardStep.profile},
    WizardStep.complete: {},
}


class WizardTransitionError(Exception):
    def __init__(self, step: WizardStep, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.step = step
        self.message = message
        self.errors = errors or {}


class WizardSubmissionError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# ─────────────────────────────────────────────
# PURE HELPERS
# ─────────────────────────────────────────────

def normalize_nickname(raw: str) -> str:
    return NICKNAME_STRIP_RE.sub("", (raw or "").lower())[:NICKNAME_MAX]


def avatar_initials(form: OnboardingForm) -> str:
    if form.nickname:
        return form.nickname[:2].upper()
    if form.name:
        return "".join(part[0] for part in form.name.split() if part)[:2].upper()
    return "AI"


def avatar_preview_url(form: OnboardingForm) -> str:
    color = form.avatar_color if form.avatar_color in AVATAR_COLORS else DEFAULT_AVATAR_COLOR
    query = urlencode(
        {
            "name": avatar_initials(form),
            "background": color,
            "color": "fff",
            "size": 200,
            "bold": "true",
        }
    )
    return f"{AVATAR_PREVIEW_URL}?{query}"


def validate_profile_step(form: OnboardingForm) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not form.name.strip():
        errors["name"] = "Full name is required"
    if not form.nickname:
        errors["nickname"] = "Nickname is required"
    elif not NICKNAME_CHARS_RE.match(form.nickname):
        errors["nickname"] = "Nickname can only contain letters, numbers, underscores and hyphens"
    elif not NICKNAME_MIN <= len(form.nickname) <= NICKNAME_MAX:
        errors["nickname"] = "Nickname must be between 2 and 30 characters"
    return errors


def validate_assignment_step(form: OnboardingForm) -> Dict[str, str]:
    errors = validate_profile_step(form)
    choices = (
        ("role", form.role, {r.value for r in RoleType}),
        ("team", form.team, {t.value for t in TeamType}),
        ("stream", form.stream, {s.value for s in StreamType}),
    )
    for field_name, value, allowed in choices:
        if not value:
            errors[field_name] = f"Please select a {field_name}"
        elif value not in allowed:
            errors[field_name] = f"Invalid {field_name}"
    return errors


GUARDS = {
    WizardStep.profile: validate_profile_step,
    WizardStep.assignment: validate_assignment_step,
}


def transition(step: WizardStep, direction: str, form: OnboardingForm) -> WizardStep:
    """
    One guarded move. Leaving the assignment step forward requires a
    successful registration, so plain navigation refuses it.
    """
    target = ALLOWED_TRANSITIONS[step].get(direction)
    if target is None:
        raise WizardTransitionError(step, f"Cannot go {direction} from {step.value}")

    if direction == NEXT:
        if step == WizardStep.assignment:
            raise WizardTransitionError(step, "Submit your registration to complete onboarding")
        guard = GUARDS.get(step)
        errors = guard(form) if guard else {}
        if errors:
            raise WizardTransitionError(step, "Please fill in all required fields", errors)

    return target


def select_options() -> Dict[str, Dict[str, str]]:
    return {
        "roles": {r.value: ROLE_DESCRIPTIONS[r] for r in RoleType},
        "teams": {t.value: f"Team {t.value}" for t in TeamType},
        "streams": {s.value: s.value for s in StreamType},
        "avatar_colors": dict(AVATAR_COLORS),
    }


# ─────────────────────────────────────────────
# CONTROLLER
# ─────────────────────────────────────────────

@dataclass
class OnboardingWizard:
    """
    Client-side onboarding controller. Holds the form until the single
    registration request made from the assignment step.
    """
    form: OnboardingForm = field(default_factory=OnboardingForm)
    step: WizardStep = WizardStep.welcome
    principal: Optional[Principal] = None
    participant_id: Optional[str] = None
    history: List[WizardStep] = field(default_factory=list)

    @property
    def step_index(self) -> int:
        return list(WizardStep).index(self.step)

    @property
    def avatar_url(self) -> str:
        return avatar_preview_url(self.form)

    def update(self, **values: Any) -> None:
        if "nickname" in values:
            values["nickname"] = normalize_nickname(values["nickname"])
        self.form = self.form.model_copy(update=values)

    def _move(self, direction: str) -> WizardStep:
        target = transition(self.step, direction, self.form)
        self.history.append(self.step)
        self.step = target
        return target

    def next(self) -> WizardStep:
        return self._move(NEXT)

    def back(self) -> WizardStep:
        return self._move(BACK)

    def registration_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.form.name.strip(),
            "nickname": self.form.nickname,
            "email": self.form.email or (self.principal.email if self.principal else None),
            "role": self.form.role,
            "team": self.form.team,
            "stream": self.form.stream,
            "avatar_url": self.avatar_url,
        }
        if self.principal is not None:
            payload["auth_user_id"] = self.principal.user_id
        return payload

    def submit(self, http: httpx.Client, register_path: str = "/api/register") -> str:
        if self.step != WizardStep.assignment:
            raise WizardTransitionError(self.step, "Registration is submitted from the assignment step")

        errors = validate_assignment_step(self.form)
        if errors:
            raise WizardTransitionError(self.step, "Please fill in all required fields", errors)

        response = http.post(register_path, json=self.registration_payload())
        try:
            result = response.json()
        except ValueError:
            result = {}

        if not response.is_success:
            message = result.get("error") or "Registration failed"
            raise WizardSubmissionError(message, status_code=response.status_code)

        self.participant_id = result.get("participant_id")
        self.history.append(self.step)
        self.step = WizardStep.complete
        return self.participant_id


@dataclass(frozen=True)
class OnboardingStart:
    redirect_to: Optional[str] = None
    wizard: Optional[OnboardingWizard] = None


def start_for(ctx: AuthContext) -> OnboardingStart:
    if ctx.participant is not None:
        return OnboardingStart(redirect_to=DASHBOARD_PATH)

    form = OnboardingForm()
    if ctx.principal is not None:
        form = form.model_copy(
            update={
                "name": ctx.principal.full_name or "",
                "email": ctx.principal.email or "",
            }
        )
    return OnboardingStart(wizard=OnboardingWizard(form=form, principal=ctx.principal))
