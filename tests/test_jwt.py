import base64
import json
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from chirpy.auth.errors import InvalidTokenError, SigningError
from chirpy.auth.jwt import (
    TOKEN_ISSUER,
    clamp_access_ttl,
    issue_access_token,
    validate_access_token,
)

SECRET = "secret"


def _b64(data: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()


def _whole_second_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def test_issue_and_validate():
    user_id = uuid.uuid4()
    token = issue_access_token(user_id, SECRET, timedelta(hours=1))

    assert validate_access_token(token, SECRET) == user_id


def test_claims():
    user_id = uuid.uuid4()
    token = issue_access_token(user_id, SECRET, timedelta(minutes=5))
    claims = jwt.get_unverified_claims(token)

    assert claims["iss"] == TOKEN_ISSUER
    assert claims["sub"] == str(user_id)
    assert claims["exp"] - claims["iat"] == 300
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_bytes_secret():
    user_id = uuid.uuid4()
    token = issue_access_token(user_id, b"\x00raw-bytes", timedelta(hours=1))

    assert validate_access_token(token, b"\x00raw-bytes") == user_id


def test_expired_token():
    token = issue_access_token(uuid.uuid4(), SECRET, -timedelta(minutes=1))

    with pytest.raises(InvalidTokenError):
        validate_access_token(token, SECRET)


def test_expiry_is_a_hard_boundary():
    now = _whole_second_now()
    token = issue_access_token(uuid.uuid4(), SECRET, timedelta(seconds=60), now=now)

    validate_access_token(token, SECRET, now=now + timedelta(seconds=59))
    with pytest.raises(InvalidTokenError):
        validate_access_token(token, SECRET, now=now + timedelta(seconds=60))


def test_wrong_secret():
    token = issue_access_token(uuid.uuid4(), SECRET, timedelta(hours=1))

    with pytest.raises(InvalidTokenError):
        validate_access_token(token, "wrong")


def test_unsigned_token_rejected():
    now = int(datetime.now(timezone.utc).timestamp())
    token = ".".join([
        _b64({"alg": "none", "typ": "JWT"}),
        _b64({"iss": TOKEN_ISSUER, "sub": str(uuid.uuid4()), "iat": now, "exp": now + 3600}),
        "",
    ])

    with pytest.raises(InvalidTokenError):
        validate_access_token(token, SECRET)


def test_other_hmac_algorithms_accepted():
    user_id = uuid.uuid4()
    now = int(datetime.now(timezone.utc).timestamp())
    token = jwt.encode(
        {"iss": TOKEN_ISSUER, "sub": str(user_id), "iat": now, "exp": now + 3600},
        SECRET,
        algorithm="HS512",
    )

    assert validate_access_token(token, SECRET) == user_id


@pytest.mark.parametrize(
    "claims",
    [
        {"iss": "someone-else", "sub": str(uuid.uuid4())},
        {"iss": TOKEN_ISSUER, "sub": "not-a-uuid"},
        {"iss": TOKEN_ISSUER},
    ],
)
def test_bad_claims_rejected(claims):
    now = int(datetime.now(timezone.utc).timestamp())
    token = jwt.encode({**claims, "iat": now, "exp": now + 3600}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        validate_access_token(token, SECRET)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token(token):
    with pytest.raises(InvalidTokenError):
        validate_access_token(token, SECRET)


def test_failures_share_one_public_message():
    expired = issue_access_token(uuid.uuid4(), SECRET, -timedelta(minutes=1))
    forged = issue_access_token(uuid.uuid4(), "other", timedelta(hours=1))

    details = set()
    for token in (expired, forged, "garbage"):
        with pytest.raises(InvalidTokenError) as exc_info:
            validate_access_token(token, SECRET)
        details.add(exc_info.value.detail)

    assert details == {InvalidTokenError.detail}


def test_empty_secret_cannot_sign():
    with pytest.raises(SigningError):
        issue_access_token(uuid.uuid4(), "", timedelta(hours=1))


@pytest.mark.parametrize(
    "requested, expected",
    [
        (None, 3600),
        (0, 3600),
        (-5, 3600),
        (3600, 3600),
        (3601, 3600),
        (240, 240),
    ],
)
def test_clamp_access_ttl(requested, expected):
    assert clamp_access_ttl(requested) == timedelta(seconds=expected)
