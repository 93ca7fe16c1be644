"""
API configuration loaded from environment or defaults.
"""

import os
from pathlib import Path


def get_database_path() -> str:
    """Get database file path from env or default."""
    return os.getenv("DATABASE_URL", "sqlite:///").replace("sqlite:///", "") or str(
        Path(__file__).resolve().parents[2] / "data" / "catalog.db"
    )


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_file() -> str | None:
    """Get API log file name, or None to log to console only."""
    return os.getenv("LOG_FILE") or None


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "5000"))


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins (comma-separated)."""
    return [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


def get_secret_key() -> str:
    """Get the key used to sign and verify bearer tokens."""
    return os.getenv("SECRET_KEY", "change-me-in-production")


def get_token_algorithm() -> str:
    """Get the bearer token signing algorithm."""
    return os.getenv("TOKEN_ALGORITHM", "HS256")


def get_token_expire_minutes() -> int:
    """Get bearer token lifetime in minutes (default 30 days)."""
    return int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(30 * 24 * 60)))
