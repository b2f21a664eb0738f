"""
Authentication error taxonomy.

Every failure inside the auth core is raised as one of these. The message a
client sees is the class-level ``detail``; the constructor argument is the
internal reason and is only ever logged.
"""

from fastapi import status


class AuthError(Exception):
    """Base class for auth failures surfaced to HTTP clients."""

    status_code: int = status.HTTP_401_UNAUTHORIZED
    detail: str = "Not authenticated"

    def __init__(self, reason: str = ""):
        super().__init__(reason or self.detail)
        self.reason = reason or self.detail


class HashingError(AuthError):
    """Password hashing backend failed or a stored hash is malformed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "An internal error occurred"


class SigningError(AuthError):
    """Access token could not be signed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "An internal error occurred"


class InvalidCredentialsError(AuthError):
    detail = "Incorrect email or password"


class MissingCredentialError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Missing bearer credential"


class UnknownTokenError(AuthError):
    detail = "Invalid refresh token"


class RevokedOrExpiredError(AuthError):
    # Same public message as UnknownTokenError
    detail = "Invalid refresh token"


class InvalidTokenError(AuthError):
    detail = "Invalid or expired token"


class AccountExistsError(AuthError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Account already exists"
