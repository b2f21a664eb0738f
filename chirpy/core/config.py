"""
Process configuration.

Values are read once from the environment (and an optional .env file) at
import time and treated as read-only afterwards.
"""

import os
import secrets
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv

from chirpy.core.logging import configure_logging, get_logger

# .env is looked up from the working directory the server is started in
load_dotenv(find_dotenv(usecwd=True))
configure_logging()

logger = get_logger(__name__)

# Platform: "dev" unlocks destructive admin endpoints
PLATFORM = os.getenv("PLATFORM", "prod").lower()

# Database URL - SQLite for dev, PostgreSQL (asyncpg) for prod
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./chirpy.db")

JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    # Tokens will not survive a restart
    JWT_SECRET = secrets.token_urlsafe(32)
    logger.warning("Using auto-generated JWT_SECRET. Set JWT_SECRET env var in production!")

ACCESS_TOKEN_TTL = timedelta(hours=1)
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "60"))


@dataclass(frozen=True)
class AuthSettings:
    """Immutable auth configuration shared by every request."""

    secret: str
    access_token_ttl: timedelta = ACCESS_TOKEN_TTL
    refresh_token_expire_days: int = REFRESH_TOKEN_EXPIRE_DAYS


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Dependency returning the process-wide auth settings."""
    return AuthSettings(secret=JWT_SECRET)


def get_trusted_hosts() -> list[str]:
    return [h.strip() for h in os.getenv("TRUSTED_HOSTS", "*").split(",") if h.strip()]


def env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"
