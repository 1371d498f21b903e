# practicedesk/core/config.py
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string)
      - JWT_SECRET_KEY (HS256 signing key, >= 32 chars)
      - JWT_ISSUER
      - JWT_AUDIENCE

    Missing JWT values fail at startup; there is no fallback key.
    """

    PROJECT_NAME: str = "PracticeDesk API"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Frontend dev servers (Vite)
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:5174",
    ]

    # DB config
    DATABASE_URL: str
    DATABASE_SSL_REQUIRED: bool = True

    # Token signing / validation
    JWT_SECRET_KEY: str
    JWT_ISSUER: str
    JWT_AUDIENCE: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_HOURS: int = 24

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def check_secret_length(cls, v: str) -> str:
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("JWT_ISSUER", "JWT_AUDIENCE")
    @classmethod
    def check_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
