"""Ports the session service talks to. Persistence lives behind these."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Protocol

from chirpy.auth.refresh import RefreshTokenRecord


class Account(Protocol):
    """The account fields the auth core reads."""

    id: uuid.UUID
    email: str
    hashed_password: str
    created_at: datetime
    updated_at: datetime


class AccountStore(Protocol):
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Return the account registered under ``email``, if any."""

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[Account]:
        """Return the account with ``user_id``, if any."""

    async def create(self, email: str, hashed_password: str) -> Account:
        """Insert a new account. Raises ``AccountExistsError`` on a taken email."""

    async def update_credentials(
        self, user_id: uuid.UUID, email: str, hashed_password: str
    ) -> Optional[Account]:
        """Overwrite email and password hash; ``None`` if the account is gone."""

    async def delete_all(self) -> None:
        """Remove every account (and, by cascade, its refresh tokens)."""


class RefreshTokenStore(Protocol):
    async def insert(self, record: RefreshTokenRecord) -> None:
        """Persist a newly issued refresh token."""

    async def find_by_token(self, raw_token: str) -> Optional[RefreshTokenRecord]:
        """Look a token up by its exact string value."""

    async def mark_revoked(self, raw_token: str, now: datetime) -> None:
        """Set ``revoked_at`` if still unset. Must be safe to call twice."""


__all__ = ["Account", "AccountStore", "RefreshTokenStore"]
