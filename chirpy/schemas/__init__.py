"""
Pydantic schemas for API request/response validation.
"""

from chirpy.schemas.auth import (
    LoginRequest,
    LoginResponse,
    TokenResponse,
)
from chirpy.schemas.user import (
    Credentials,
    UserCreate,
    UserUpdate,
    UserResponse,
)
from chirpy.schemas.common import (
    ErrorResponse,
)

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "TokenResponse",
    # User
    "Credentials",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    # Common
    "ErrorResponse",
]
