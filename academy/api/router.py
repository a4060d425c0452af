from fastapi import APIRouter

from academy.api.health import router as health_router
from academy.api.auth import router as auth_router
from academy.api.register import router as register_router
from academy.api.account import router as account_router
from academy.api.profile import router as profile_router
from academy.api.onboarding import router as onboarding_router


api_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / AUTH
# ------------------------------------------------------------------
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# ------------------------------------------------------------------
# PARTICIPANT LIFECYCLE
# ------------------------------------------------------------------
api_router.include_router(register_router, tags=["registration"])
api_router.include_router(onboarding_router, tags=["onboarding"])
api_router.include_router(profile_router, tags=["profile"])
api_router.include_router(account_router, tags=["account"])
