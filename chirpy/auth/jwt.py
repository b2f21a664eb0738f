"""
JWT access token handling.

Access tokens are short-lived, self-contained HS256 JWTs:
- ``iss`` is always "chirpy"
- ``sub`` is the user's UUID
- ``iat`` / ``exp`` bound the validity window

They are never stored and never revoked; a token is valid exactly when its
signature verifies under the shared secret and ``now < exp``.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import NoReturn, Optional, Union

from jose import jwt, JWTError
from jose.constants import ALGORITHMS

from chirpy.auth.errors import InvalidTokenError, SigningError
from chirpy.core.logging import get_logger

logger = get_logger(__name__)

JWT_ALGORITHM = ALGORITHMS.HS256
TOKEN_ISSUER = "chirpy"

# Only symmetric-MAC tokens are ever accepted
ALLOWED_ALGORITHMS = sorted(ALGORITHMS.HMAC)

MAX_ACCESS_TOKEN_SECONDS = 3600

Secret = Union[str, bytes]


def clamp_access_ttl(seconds: Optional[int]) -> timedelta:
    """
    Turn a client-requested token lifetime into the TTL actually used.

    Missing, non-positive or over-an-hour requests all get one hour.
    """
    if seconds is None or seconds <= 0 or seconds >= MAX_ACCESS_TOKEN_SECONDS:
        return timedelta(seconds=MAX_ACCESS_TOKEN_SECONDS)
    return timedelta(seconds=seconds)


def issue_access_token(
    user_id: uuid.UUID,
    secret: Secret,
    ttl: timedelta,
    now: Optional[datetime] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        user_id: The subject's UUID
        secret: Shared HMAC signing secret
        ttl: Lifetime; a negative ttl yields an already-expired token
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded JWT string

    Raises:
        SigningError: If the secret is empty or encoding fails
    """
    if not secret:
        raise SigningError("signing secret is empty")

    now = now or datetime.now(timezone.utc)
    payload = {
        "iss": TOKEN_ISSUER,
        "sub": str(user_id),
        "iat": now,
        "exp": now + ttl,
    }

    try:
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)
    except JWTError as e:
        raise SigningError(f"could not sign access token: {e}") from e


def validate_access_token(
    token: str,
    secret: Secret,
    now: Optional[datetime] = None,
) -> uuid.UUID:
    """
    Verify an access token and return its subject.

    Every failure raises the same ``InvalidTokenError``; the specific reason
    is only logged.

    Raises:
        InvalidTokenError: Malformed token, non-HMAC algorithm, bad signature,
            wrong issuer, expired, or a subject that is not a UUID
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        _reject(f"malformed token: {e}")

    if header.get("alg") not in ALLOWED_ALGORITHMS:
        _reject(f"unexpected signing method {header.get('alg')!r}")

    if not secret:
        _reject("verification secret is empty")

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=ALLOWED_ALGORITHMS,
            issuer=TOKEN_ISSUER,
            options={"require_exp": True, "require_sub": True, "require_iss": True},
        )
    except JWTError as e:
        _reject(str(e))

    # No leeway: expired the instant now reaches exp
    now = now or datetime.now(timezone.utc)
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or now.timestamp() >= exp:
        _reject("token has expired or has no expiry")

    try:
        return uuid.UUID(claims.get("sub"))
    except (TypeError, ValueError, AttributeError):
        _reject(f"subject {claims.get('sub')!r} is not a valid user id")


def _reject(reason: str) -> NoReturn:
    logger.info("Rejected access token: %s", reason)
    raise InvalidTokenError(reason)
