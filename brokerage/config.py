"""
Brokerage Back-Office - Configuration Management

Centralized configuration using Pydantic Settings.
All secrets and connection strings are loaded from environment variables.

Security: No secrets are hardcoded. Use .env for local development.
"""

import logging
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        DATABASE_URL: SQLAlchemy URL (PostgreSQL in production, SQLite locally)
        SESSION_TTL_DAYS: Fixed lifetime of an admin session
        RESET_TOKEN_TTL_MINUTES: Lifetime of a password-reset token
        BCRYPT_WORK_FACTOR: bcrypt cost; lower it only for tests
        EXPOSE_RESET_TOKENS: Return reset tokens in API responses (dev only)
        REVOKE_SESSIONS_ON_PASSWORD_RESET: Log out every device after a reset
        ALLOWED_ORIGINS: CORS allowed origins for the site frontend
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Brokerage Back-Office"

    # Database
    DATABASE_URL: str = "sqlite:///./brokerage.db"
    SQL_ECHO: bool = False

    # Authentication
    SESSION_TTL_DAYS: int = 7
    RESET_TOKEN_TTL_MINUTES: int = 60
    BCRYPT_WORK_FACTOR: int = 12
    EXPOSE_RESET_TOKENS: bool = False
    REVOKE_SESSIONS_ON_PASSWORD_RESET: bool = False

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()


def configure_logging(level: str = None) -> None:
    """Install a root handler with a uniform format (idempotent)."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
