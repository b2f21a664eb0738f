"""
Authentication and session lifecycle.

Provides:
- Password hashing (Argon2id)
- Bearer credential extraction
- JWT access token issue/validation
- Opaque refresh tokens and their revocation
- The session service tying them together
"""

from chirpy.auth.bearer import extract_bearer_token
from chirpy.auth.errors import (
    AuthError,
    HashingError,
    SigningError,
    InvalidCredentialsError,
    MissingCredentialError,
    UnknownTokenError,
    RevokedOrExpiredError,
    InvalidTokenError,
    AccountExistsError,
)
from chirpy.auth.jwt import (
    clamp_access_ttl,
    issue_access_token,
    validate_access_token,
)
from chirpy.auth.password import (
    hash_password,
    verify_password,
    needs_rehash,
)
from chirpy.auth.refresh import (
    RefreshTokenRecord,
    build_refresh_record,
    generate_refresh_token,
    is_usable,
)
from chirpy.auth.session import LoginResult, SessionService

__all__ = [
    # Errors
    "AuthError",
    "HashingError",
    "SigningError",
    "InvalidCredentialsError",
    "MissingCredentialError",
    "UnknownTokenError",
    "RevokedOrExpiredError",
    "InvalidTokenError",
    "AccountExistsError",
    # Bearer
    "extract_bearer_token",
    # JWT
    "clamp_access_ttl",
    "issue_access_token",
    "validate_access_token",
    # Password
    "hash_password",
    "verify_password",
    "needs_rehash",
    # Refresh tokens
    "RefreshTokenRecord",
    "build_refresh_record",
    "generate_refresh_token",
    "is_usable",
    # Sessions
    "LoginResult",
    "SessionService",
]
