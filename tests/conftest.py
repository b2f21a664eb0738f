import os
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

# Must be set before chirpy.core.config is imported
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from chirpy.auth.errors import AccountExistsError
from chirpy.auth.refresh import RefreshTokenRecord
from chirpy.auth.session import SessionService
from chirpy.core.config import AuthSettings

SECRET = "test-secret"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FakeAccount:
    email: str
    hashed_password: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


class InMemoryAccountStore:
    def __init__(self):
        self.accounts: dict[uuid.UUID, FakeAccount] = {}

    async def find_by_email(self, email: str) -> Optional[FakeAccount]:
        return next((a for a in self.accounts.values() if a.email == email), None)

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[FakeAccount]:
        return self.accounts.get(user_id)

    async def create(self, email: str, hashed_password: str) -> FakeAccount:
        if await self.find_by_email(email):
            raise AccountExistsError(email)
        account = FakeAccount(email=email, hashed_password=hashed_password)
        self.accounts[account.id] = account
        return account

    async def update_credentials(self, user_id, email, hashed_password):
        account = self.accounts.get(user_id)
        if account is None:
            return None
        account.email = email
        account.hashed_password = hashed_password
        account.updated_at = _now()
        return account

    async def delete_all(self) -> None:
        self.accounts.clear()


class InMemoryRefreshTokenStore:
    def __init__(self):
        self.records: dict[str, RefreshTokenRecord] = {}
        self.revoke_writes = 0

    async def insert(self, record: RefreshTokenRecord) -> None:
        self.records[record.token] = record

    async def find_by_token(self, raw_token: str) -> Optional[RefreshTokenRecord]:
        return self.records.get(raw_token)

    async def mark_revoked(self, raw_token: str, now: datetime) -> None:
        self.revoke_writes += 1
        record = self.records[raw_token]
        if record.revoked_at is None:
            self.records[raw_token] = replace(record, revoked_at=now, updated_at=now)


class FakeClock:
    """Settable clock starting at the real current time."""

    def __init__(self):
        self.now = _now()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def settings():
    return AuthSettings(secret=SECRET)


@pytest.fixture
def accounts():
    return InMemoryAccountStore()


@pytest.fixture
def refresh_tokens():
    return InMemoryRefreshTokenStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(accounts, refresh_tokens, settings, clock):
    return SessionService(accounts, refresh_tokens, settings, clock=clock)
