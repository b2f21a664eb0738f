import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from chirpy.auth.refresh import build_refresh_record, generate_refresh_token, is_usable


def test_generate_is_opaque_hex():
    token = generate_refresh_token()

    assert len(token) == 64
    int(token, 16)
    assert generate_refresh_token() != token


def test_build_record():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    owner = uuid.uuid4()
    record = build_refresh_record("tok", owner, now)

    assert record.token == "tok"
    assert record.user_id == owner
    assert record.created_at == now
    assert record.expires_at == now + timedelta(days=60)
    assert record.revoked_at is None


def test_custom_horizon():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    record = build_refresh_record("tok", uuid.uuid4(), now, expire_days=7)

    assert record.expires_at == now + timedelta(days=7)


def test_usable_until_expiry():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    record = build_refresh_record(generate_refresh_token(), uuid.uuid4(), now)

    assert is_usable(record, now)
    assert is_usable(record, record.expires_at - timedelta(seconds=1))
    assert not is_usable(record, record.expires_at)


def test_revoked_is_not_usable():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    record = build_refresh_record(generate_refresh_token(), uuid.uuid4(), now)
    revoked = replace(record, revoked_at=now + timedelta(hours=1))

    assert revoked.is_revoked
    assert not is_usable(revoked, now + timedelta(hours=1))
    # Revocation wins even well before expiry
    assert not is_usable(revoked, now)
    assert not record.is_revoked
