# academy/api/onboarding.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from academy.core.deps import get_auth_context
from academy.core.errors import ValidationError
from academy.schemas.onboarding import OnboardingStartResponse, TransitionRequest, TransitionResponse
from academy.services.auth_context import AuthContext
from academy.services.onboarding_wizard import (
    WizardStep,
    WizardTransitionError,
    avatar_preview_url,
    normalize_nickname,
    select_options,
    start_for,
    transition,
)

router = APIRouter(prefix="/onboarding")


@router.get("", response_model=OnboardingStartResponse)
def start_onboarding(ctx: AuthContext = Depends(get_auth_context)):
    start = start_for(ctx)
    if start.redirect_to:
        return OnboardingStartResponse(redirect_to=start.redirect_to)

    return OnboardingStartResponse(
        step=start.wizard.step.value,
        form=start.wizard.form,
        options=select_options(),
    )


@router.post("/transition", response_model=TransitionResponse)
def transition_step(req: TransitionRequest):
    try:
        step = WizardStep(req.step)
    except ValueError:
        raise ValidationError("Unknown onboarding step", {"step": f"Unknown step {req.step!r}"})

    form = req.form.model_copy(update={"nickname": normalize_nickname(req.form.nickname)})
    try:
        target = transition(step, req.direction, form)
    except WizardTransitionError as exc:
        raise ValidationError(exc.message, exc.errors)

    return TransitionResponse(step=target.value, avatar_url=avatar_preview_url(form))
