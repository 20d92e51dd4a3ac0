"""Application settings loaded from environment with safe fallbacks.

Environment precedence:
- Loads `.env` from the repo root before reading process env vars.
- Most values are pulled straight from env; booleans go through `_env_flag` so `"0"/"false"` work.
- CORS is normalized from `CORS_ORIGINS` (comma-separated) with a permissive local default.
- The database URL falls back to a local SQLite file so the API can boot without Postgres.

Key expectations (defaults in parentheses):
- `APP_ENV` controls settings class selection (`production` default).
- Database: `DATABASE_URL`, or `TEST_DATABASE_URL` when running tests.
- Tokens: `SECRET_KEY`, `ALGORITHM` (`HS256`), `ACCESS_TOKEN_EXPIRE_MINUTES` (`60`).
- Routing: `API_PREFIX` (`/api`).
"""

import logging
import os
from pathlib import Path
from typing import Annotated, ClassVar, Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# (__file__ is projecthub/core/config/settings.py, so the repo root is three levels up)
BASE_DIR = Path(__file__).resolve().parents[3]


load_dotenv(BASE_DIR / ".env")

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_URL = f"sqlite:///{BASE_DIR / 'projecthub.db'}"


def _env_flag(name: str, *, default: Optional[bool] = False) -> Optional[bool]:
    """
    Helper to parse boolean-like environment variables.
    """
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Behavior highlights:
    - Loads `.env` at repo root, then lets process env override.
    - Prefers `DATABASE_URL`; tests resolve `TEST_DATABASE_URL` first.
    - Feature toggles parsed via `_env_flag` to accept common truthy/falsey strings.
    - CORS origins normalized once to avoid mutation side effects in settings instances.
    """

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = os.getenv("APP_NAME", "projecthub")
    environment: str = os.getenv("APP_ENV", "production")
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    database_url: Optional[str] = os.getenv("DATABASE_URL")
    test_database_url: Optional[str] = os.getenv("TEST_DATABASE_URL")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_dir: Optional[str] = os.getenv("LOG_DIR")
    use_json_logs: bool = _env_flag("USE_JSON_LOGS", default=False)

    # Read raw from CORS_ORIGINS and split on commas, not JSON-decoded.
    cors_origins: Annotated[list[str], NoDecode] = []

    secret_key: str = os.getenv("SECRET_KEY", "change-me-in-production")
    algorithm: str = os.getenv("ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

    default_code_filename: str = os.getenv("DEFAULT_CODE_FILENAME", "Main.java")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        env_override = os.getenv("APP_ENV")
        if env_override:
            object.__setattr__(self, "environment", env_override)

        if not self.cors_origins:
            object.__setattr__(self, "cors_origins", ["*"])

        if self.secret_key == "change-me-in-production" and (
            self.environment.lower() == "production"
        ):
            logger.warning("SECRET_KEY is not set; using the built-in development key.")

    def get_database_url(self, *, use_test: bool = False) -> str:
        """Resolve the SQLAlchemy database URL for runtime or tests.

        Priority: `TEST_DATABASE_URL` when requested, then `DATABASE_URL`,
        finally a SQLite file at the repo root.
        """
        if use_test and self.test_database_url:
            return self.test_database_url
        if self.database_url:
            return self.database_url
        return DEFAULT_SQLITE_URL
