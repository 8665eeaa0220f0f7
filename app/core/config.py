"""Application configuration."""
from functools import lru_cache
from typing import Optional, List
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "Workplace Admin API"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # Database
    DATABASE_URL: str
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_TIMEOUT: int = 30          # seconds to wait for a pooled connection
    DATABASE_POOL_RECYCLE: int = 1800
    DATABASE_STATEMENT_TIMEOUT_MS: int = 30000

    # JWT (REQUIRED)
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "workplace-admin-api"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Accounts
    MIN_PASSWORD_LENGTH: int = 8
    BCRYPT_ROUNDS: int = 10

    # Bootstrap platform admin (used by app.seed_data)
    BOOTSTRAP_PLATFORM_ADMIN_EMAIL: Optional[str] = None
    BOOTSTRAP_PLATFORM_ADMIN_PASSWORD: Optional[str] = None
    BOOTSTRAP_PLATFORM_ADMIN_FIRST_NAME: str = "Platform"
    BOOTSTRAP_PLATFORM_ADMIN_LAST_NAME: str = "Admin"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors(cls, v):
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    @property
    def access_token_expire_seconds(self) -> int:
        return self.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    class Config:
        env_file = ".env"      # Local only
        case_sensitive = True
        extra = "ignore"      # Ignore unrelated env vars


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
