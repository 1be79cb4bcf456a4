from __future__ import annotations

import json
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Env values are split by the validator below instead of JSON-decoded up front.
CsvList = Annotated[List[str], NoDecode]


class AppSettings(BaseSettings):
    """
    Service settings for the paint-line API, read from the environment or .env.

    Database connection settings live in paintshop.db.config.Settings.
    """

    # FastAPI metadata
    APP_NAME: str = Field(default="Paint Line Dashboard API")
    APP_DESCRIPTION: str = Field(
        default=(
            "Backend API for the paint-line operations dashboard. Provides hourly production "
            "logging, material consumption, item requisitions and 8D problem reports."
        )
    )
    APP_VERSION: str = Field(default="0.1.0")

    # CORS
    CORS_ORIGINS: CsvList = Field(
        default_factory=lambda: ["*"],
        description="Comma-separated list or JSON array of allowed origins. Default: *",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)
    CORS_ALLOW_METHODS: CsvList = Field(default_factory=lambda: ["*"])
    CORS_ALLOW_HEADERS: CsvList = Field(default_factory=lambda: ["*"])

    # Startup behavior
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(
        default=True,
        description="If true, run Alembic migrations (upgrade head) at app startup.",
    )
    AUTO_SEED: bool = Field(
        default=False,
        description="If true, run minimal database seeding after migrations.",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Root log level name")

    # Session tokens
    TOKEN_TTL_HOURS: int = Field(
        default=24, ge=1, description="Session tokens older than this are rejected."
    )

    # Production targets
    HOURLY_SKID_TARGET: int = Field(
        default=50, ge=1, description="Skids the line is expected to produce per hourly slot."
    )

    # Seed admin account
    SEED_ADMIN_USERNAME: str = Field(default="admin")
    SEED_ADMIN_PASSWORD: str = Field(default="admin123")
    SEED_ADMIN_EMAIL: str = Field(default="admin@paintshop.com")
    SEED_ADMIN_NAME: str = Field(default="Administrador")

    ENVIRONMENT: Optional[str] = Field(default=None, description="Environment label (dev/test/prod)")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CORS_ORIGINS", "CORS_ALLOW_METHODS", "CORS_ALLOW_HEADERS", mode="before")
    @classmethod
    def _split_list(cls, v):
        """Accept a JSON array or "a,b,c"; an empty value means "*"."""
        if isinstance(v, str):
            text = v.strip()
            if text.startswith("["):
                v = json.loads(text)
            else:
                v = [p.strip() for p in text.split(",") if p.strip()]
        return list(v or []) or ["*"]


# PUBLIC_INTERFACE
def get_app_settings() -> AppSettings:
    """
    Return a new AppSettings instance populated from environment variables.

    Note:
      A new instance is built on each call so tests can change the environment
      between app instantiations.
    """
    return AppSettings()
