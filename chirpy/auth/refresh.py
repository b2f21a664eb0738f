"""
Opaque refresh tokens.

A refresh token is 256 bits of randomness, hex encoded. It carries no claims
and cannot be decoded; the server-side record is the only source of truth.
Persistence is delegated to a ``RefreshTokenStore``; this module owns what
the record means.
"""

import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

REFRESH_TOKEN_BYTES = 32
DEFAULT_EXPIRE_DAYS = 60


@dataclass(frozen=True)
class RefreshTokenRecord:
    """Stored refresh token state."""

    token: str
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    expires_at: datetime
    revoked_at: Optional[datetime] = None

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None


def generate_refresh_token() -> str:
    """Generate a new random refresh token (64 hex chars)."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def build_refresh_record(
    raw_token: str,
    owner_id: uuid.UUID,
    now: datetime,
    expire_days: int = DEFAULT_EXPIRE_DAYS,
) -> RefreshTokenRecord:
    """Build the record to persist for a freshly issued token."""
    return RefreshTokenRecord(
        token=raw_token,
        user_id=owner_id,
        created_at=now,
        updated_at=now,
        expires_at=now + timedelta(days=expire_days),
        revoked_at=None,
    )


def is_usable(record: RefreshTokenRecord, now: datetime) -> bool:
    """True iff the token is not revoked and has not yet expired."""
    return record.revoked_at is None and now < record.expires_at
