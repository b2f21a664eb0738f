"""
SQLAlchemy implementations of the account and refresh token stores.

Each store wraps the request's ``AsyncSession`` and commits its own writes.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.auth.errors import AccountExistsError
from chirpy.auth.refresh import RefreshTokenRecord
from chirpy.models.refresh_token import RefreshToken
from chirpy.models.user import User


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlAccountStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def create(self, email: str, hashed_password: str) -> User:
        user = User(email=email, hashed_password=hashed_password)
        self.session.add(user)
        await self._commit(email)
        return user

    async def update_credentials(
        self, user_id: uuid.UUID, email: str, hashed_password: str
    ) -> Optional[User]:
        user = await self.session.get(User, user_id)
        if user is None:
            return None

        user.email = email
        user.hashed_password = hashed_password
        user.updated_at = datetime.now(timezone.utc)
        await self._commit(email)
        return user

    async def delete_all(self) -> None:
        await self.session.execute(delete(RefreshToken))
        await self.session.execute(delete(User))
        await self.session.commit()

    async def _commit(self, email: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise AccountExistsError(f"email {email!r} is already registered") from e


class SqlRefreshTokenStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, record: RefreshTokenRecord) -> None:
        self.session.add(
            RefreshToken(
                token=record.token,
                user_id=record.user_id,
                created_at=record.created_at,
                updated_at=record.updated_at,
                expires_at=record.expires_at,
                revoked_at=record.revoked_at,
            )
        )
        await self.session.commit()

    async def find_by_token(self, raw_token: str) -> Optional[RefreshTokenRecord]:
        # Always hit the database; a token revoked a moment ago must show as revoked
        result = await self.session.execute(
            select(RefreshToken)
            .where(RefreshToken.token == raw_token)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None

        return RefreshTokenRecord(
            token=row.token,
            user_id=row.user_id,
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
            expires_at=_as_utc(row.expires_at),
            revoked_at=_as_utc(row.revoked_at),
        )

    async def mark_revoked(self, raw_token: str, now: datetime) -> None:
        # Conditional write: a concurrent revoke that lost the race is a no-op
        await self.session.execute(
            update(RefreshToken)
            .where(RefreshToken.token == raw_token, RefreshToken.revoked_at.is_(None))
            .values(revoked_at=now, updated_at=now)
        )
        await self.session.commit()
