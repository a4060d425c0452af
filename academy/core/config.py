from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "AI Academy Participants"
    environment: str = "dev"
    log_level: str = "INFO"
    public_base_url: str = "http://localhost:3000"

    # ─────────── API ───────────
    api_prefix: str = "/api"
    request_id_header: str = "X-Correlation-Id"

    # ─────────── DATABASE ───────────
    database_url: str

    # ─────────── JWT / AUTH ───────────
    # Access tokens are issued by the hosted auth service and signed with the project secret.
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "authenticated"
    jwt_access_token_minutes: int = 60

    # ─────────── IDENTITY PROVIDER ───────────
    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""

    # ─────────── GITHUB / AVATARS ───────────
    github_api_url: str = "https://api.github.com"
    github_repo_name: str = "ai-academy-2026"
    avatar_service_url: str = "https://ui-avatars.com/api/"

    http_timeout_seconds: float = 10.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
