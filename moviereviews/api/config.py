"""
API configuration loaded from environment or defaults.

The getters read individual environment variables; ``Settings`` gathers
them into one validated object built once at process start.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DEV_SECRET_KEY = "dev-only-secret-key-change-me-in-production"


def get_database_url() -> str:
    """Get database URL (or SQLite file path) from env or default."""
    return os.getenv("DATABASE_URL", "") or str(
        Path(__file__).resolve().parents[2] / "data" / "moviereviews.db"
    )


def get_secret_key() -> str:
    """Get the token signing key from env or the development default."""
    return os.getenv("SECRET_KEY", "") or DEV_SECRET_KEY


def get_token_ttl_hours() -> float:
    """Get token lifetime in hours."""
    return float(os.getenv("TOKEN_TTL_HOURS", "24"))


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_file() -> Optional[str]:
    """Get optional log file name."""
    return os.getenv("LOG_FILE") or None


def get_log_dir() -> str:
    """Get directory for the log file."""
    return os.getenv("LOG_DIR", "logs")


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "8000"))


class Settings(BaseModel):
    """Process-wide configuration."""

    database_url: str = Field(default_factory=get_database_url)
    secret_key: str = Field(default_factory=get_secret_key, min_length=1)
    token_ttl_hours: float = Field(default_factory=get_token_ttl_hours, gt=0)
    log_level: str = Field(default_factory=get_log_level)
    log_file: Optional[str] = Field(default_factory=get_log_file)
    log_dir: str = Field(default_factory=get_log_dir)
    api_host: str = Field(default_factory=get_api_host)
    api_port: int = Field(default_factory=get_api_port)
    echo_sql: bool = False

    @property
    def uses_dev_secret(self) -> bool:
        return self.secret_key == DEV_SECRET_KEY
