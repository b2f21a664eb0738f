"""
Authentication endpoints.

Provides:
- Login (email/password → access token + refresh token)
- Token refresh (refresh token → new access token)
- Revoke (invalidate a refresh token)

Refresh and revoke read the refresh token from the ``Bearer`` header.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from chirpy.auth.dependencies import get_session_service
from chirpy.auth.session import SessionService
from chirpy.schemas.auth import LoginRequest, LoginResponse, TokenResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    service: SessionService = Depends(get_session_service),
):
    """
    Authenticate user and return a token pair.

    Wrong email and wrong password get the same 401.
    """
    result = await service.login(
        login_data.email,
        login_data.password,
        expires_in_seconds=login_data.expires_in_seconds,
    )
    account = result.account

    return LoginResponse(
        id=account.id,
        created_at=account.created_at,
        updated_at=account.updated_at,
        email=account.email,
        token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    request: Request,
    service: SessionService = Depends(get_session_service),
):
    """Exchange a refresh token for a new one-hour access token."""
    token = await service.refresh(request.headers)
    return TokenResponse(token=token)


@router.post("/revoke", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_token(
    request: Request,
    service: SessionService = Depends(get_session_service),
):
    """Revoke a refresh token. Revoking an already revoked token also returns 204."""
    await service.revoke(request.headers)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
