"""
Session lifecycle: login, refresh, revoke, and authenticated account updates.

A user moves between three states per refresh token:

    no-session --login--> active-session --revoke--> revoked
                              |   ^                    |  ^
                              +---+ refresh            +--+ revoke (no-op)

Access tokens are minted on login and on every successful refresh. The
refresh token itself is never rotated or extended.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

from chirpy.auth.bearer import extract_bearer_token
from chirpy.auth.errors import (
    HashingError,
    InvalidCredentialsError,
    InvalidTokenError,
    RevokedOrExpiredError,
    UnknownTokenError,
)
from chirpy.auth.jwt import clamp_access_ttl, issue_access_token, validate_access_token
from chirpy.auth.password import hash_password, needs_rehash, verify_password
from chirpy.auth.ports import Account, AccountStore, RefreshTokenStore
from chirpy.auth.refresh import build_refresh_record, generate_refresh_token, is_usable
from chirpy.core.config import AuthSettings
from chirpy.core.logging import get_logger

logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Verified against when the email is unknown so both failure paths cost the same.
# Built at import so no request pays for creating it.
_DUMMY_HASH = hash_password(uuid.uuid4().hex)


@dataclass(frozen=True)
class LoginResult:
    account: Account
    access_token: str
    refresh_token: str


class SessionService:
    """Composes hashing, token codec and refresh records into user-facing flows."""

    def __init__(
        self,
        accounts: AccountStore,
        refresh_tokens: RefreshTokenStore,
        settings: AuthSettings,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.accounts = accounts
        self.refresh_tokens = refresh_tokens
        self.settings = settings
        self.clock = clock

    async def register(self, email: str, password: str) -> Account:
        """Create an account with a freshly hashed password."""
        account = await self.accounts.create(email, hash_password(password))
        logger.info("Registered account %s", account.id)
        return account

    async def login(
        self,
        email: str,
        password: str,
        expires_in_seconds: Optional[int] = None,
    ) -> LoginResult:
        """
        Check credentials and open a session.

        Unknown email, wrong password and an unreadable stored hash all raise
        the same ``InvalidCredentialsError``.
        """
        account = await self.accounts.find_by_email(email)

        if account is None:
            # Burn the same verification cost as a real account
            verify_password(password, _DUMMY_HASH)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError("unknown email")

        try:
            matches = verify_password(password, account.hashed_password)
        except HashingError:
            logger.error("Login failed: stored hash for account %s is malformed", account.id)
            raise InvalidCredentialsError("malformed stored hash")

        if not matches:
            logger.info("Login failed: wrong password for account %s", account.id)
            raise InvalidCredentialsError("wrong password")

        # Upgrade hashes made with older argon2 parameters
        if needs_rehash(account.hashed_password):
            upgraded = await self.accounts.update_credentials(
                account.id, account.email, hash_password(password)
            )
            if upgraded is not None:
                account = upgraded

        now = self.clock()
        access_token = issue_access_token(
            account.id,
            self.settings.secret,
            clamp_access_ttl(expires_in_seconds),
            now=now,
        )

        refresh_token = generate_refresh_token()
        await self.refresh_tokens.insert(
            build_refresh_record(
                refresh_token,
                account.id,
                now,
                expire_days=self.settings.refresh_token_expire_days,
            )
        )

        logger.info("Account %s logged in", account.id)
        return LoginResult(account=account, access_token=access_token, refresh_token=refresh_token)

    async def refresh(self, metadata: Mapping[str, str]) -> str:
        """Exchange a live refresh token for a new access token."""
        raw_token = extract_bearer_token(metadata)

        record = await self.refresh_tokens.find_by_token(raw_token)
        if record is None:
            raise UnknownTokenError("refresh token does not exist")

        now = self.clock()
        if not is_usable(record, now):
            logger.info(
                "Refresh refused for account %s: %s",
                record.user_id,
                "revoked" if record.is_revoked else "expired",
            )
            raise RevokedOrExpiredError("refresh token is revoked or expired")

        account = await self.accounts.find_by_id(record.user_id)
        if account is None:
            raise UnknownTokenError("refresh token owner no longer exists")

        return issue_access_token(account.id, self.settings.secret, self.settings.access_token_ttl, now=now)

    async def revoke(self, metadata: Mapping[str, str]) -> None:
        """Revoke a refresh token. Revoking twice is not an error."""
        raw_token = extract_bearer_token(metadata)

        record = await self.refresh_tokens.find_by_token(raw_token)
        if record is None:
            raise UnknownTokenError("refresh token does not exist")

        if record.is_revoked:
            return

        await self.refresh_tokens.mark_revoked(raw_token, self.clock())
        logger.info("Revoked refresh token for account %s", record.user_id)

    async def authenticate(self, metadata: Mapping[str, str]) -> uuid.UUID:
        """Return the user id carried by the request's access token."""
        token = extract_bearer_token(metadata)
        return validate_access_token(token, self.settings.secret, now=self.clock())

    async def update_account(self, user_id: uuid.UUID, email: str, password: str) -> Account:
        """
        Change email and password for an authenticated user.

        ``user_id`` comes from ``authenticate``. A subject whose account is
        gone is treated like a bad token.
        """
        account = await self.accounts.update_credentials(user_id, email, hash_password(password))
        if account is None:
            raise InvalidTokenError(f"token subject {user_id} has no account")

        logger.info("Updated credentials for account %s", user_id)
        return account
