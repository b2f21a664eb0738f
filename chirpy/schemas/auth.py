"""
Authentication-related schemas.
"""

from typing import Optional
from pydantic import BaseModel, Field

from chirpy.schemas.user import Credentials, UserResponse


class LoginRequest(Credentials):
    """Login request with email and password."""

    expires_in_seconds: Optional[int] = Field(
        default=None,
        description="Requested access token lifetime; capped at one hour",
    )


class LoginResponse(UserResponse):
    """Account info plus a fresh token pair."""

    token: str = Field(description="JWT access token")
    refresh_token: str = Field(description="Opaque refresh token")


class TokenResponse(BaseModel):
    """Response with a new access token."""

    token: str = Field(description="New JWT access token")
