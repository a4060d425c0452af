from academy.schemas.registration import RegisterRequest, RegisterResponse
from academy.schemas.auth import LoginRequest, MagicLinkRequest, TokenResponse, AuthContextResponse
from academy.schemas.profile import ProfileView, LinkIdentityResponse
from academy.schemas.onboarding import OnboardingForm, TransitionRequest, TransitionResponse, OnboardingStartResponse
