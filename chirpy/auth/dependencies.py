"""
FastAPI dependencies for authentication.

Provides:
- get_session_service: SessionService bound to the request's DB session
- get_current_user_id: Validate the request's access token
"""

import uuid

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.auth.session import SessionService
from chirpy.core.config import AuthSettings, get_auth_settings
from chirpy.core.database import get_db
from chirpy.core.store import SqlAccountStore, SqlRefreshTokenStore


async def get_session_service(
    db: AsyncSession = Depends(get_db),
    settings: AuthSettings = Depends(get_auth_settings),
) -> SessionService:
    return SessionService(
        accounts=SqlAccountStore(db),
        refresh_tokens=SqlRefreshTokenStore(db),
        settings=settings,
    )


async def get_current_user_id(
    request: Request,
    service: SessionService = Depends(get_session_service),
) -> uuid.UUID:
    """
    Extract and validate the caller's identity from the ``Bearer`` header.

    Raises:
        MissingCredentialError: If no token was sent
        InvalidTokenError: If the token is forged, expired or malformed
    """
    return await service.authenticate(request.headers)
