"""
Password hashing with Argon2id.

Argon2id is memory-hard (resists GPU/ASIC attacks) and side-channel
resistant. The encoded hash is self-describing: algorithm, parameters, salt
and digest all live in the one string stored on the account.

Security parameters are tuned for:
- ~250ms hash time on modern hardware
- 64MB memory usage
"""

from argon2 import PasswordHasher
from argon2.exceptions import (
    HashingError as Argon2HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from chirpy.auth.errors import HashingError

ph = PasswordHasher(
    time_cost=3,        # Number of iterations
    memory_cost=65536,  # 64 MB memory usage
    parallelism=4,      # Number of parallel threads
    hash_len=32,        # Length of the hash in bytes
    salt_len=16,        # Length of the random salt
)


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    A fresh random salt is drawn on every call, so hashing the same password
    twice yields two different strings that both verify.

    Args:
        password: The plaintext password to hash (may be empty)

    Returns:
        The encoded hash (includes algorithm, params, salt, and hash)

    Raises:
        HashingError: If the argon2 backend fails
    """
    try:
        return ph.hash(password)
    except Argon2HashingError as e:
        raise HashingError(f"argon2 hash failed: {e}") from e


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its hash in constant time.

    Args:
        password: The plaintext password to verify
        password_hash: The stored hash to verify against

    Returns:
        True if password matches, False otherwise

    Raises:
        HashingError: If ``password_hash`` is not a decodable argon2 hash
    """
    try:
        return ph.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError) as e:
        # Anything other than a clean mismatch means the hash did not decode
        raise HashingError("stored password hash is malformed") from e


def needs_rehash(password_hash: str) -> bool:
    """
    Check if a password hash was made with outdated parameters.

    After a successful login, check this and rehash if needed.
    """
    try:
        return ph.check_needs_rehash(password_hash)
    except InvalidHashError:
        return True  # Invalid hash should definitely be rehashed
