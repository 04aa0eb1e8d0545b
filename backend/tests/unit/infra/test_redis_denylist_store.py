# tests/unit/infra/test_redis_denylist_store.py
"""Unit tests for RedisTokenDenylistStore using fakeredis."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import fakeredis
import pytest
from commerce_auth.infra.redis import RedisTokenDenylistStore

from tests.helpers.clock import ManualClock

NOW = datetime(2025, 2, 1, 10, 0, tzinfo=UTC)


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def store(fake_redis):
    return RedisTokenDenylistStore(fake_redis, clock=ManualClock(NOW))


def test_unknown_jti_is_not_revoked(store):
    assert store.is_revoked("jti-1") is False


def test_revoke_sets_marker_with_remaining_lifetime_as_ttl(store, fake_redis):
    store.revoke_jti(jti="jti-1", expires_at=NOW + timedelta(hours=2, milliseconds=400))

    assert store.is_revoked("jti-1") is True
    assert fake_redis.get("deny:rt:jti-1") == b"1"
    assert 7200 <= fake_redis.ttl("deny:rt:jti-1") <= 7201


def test_revoke_is_idempotent(store, fake_redis):
    store.revoke_jti(jti="jti-1", expires_at=NOW + timedelta(minutes=5))
    store.revoke_jti(jti="jti-1", expires_at=NOW + timedelta(minutes=5))
    assert fake_redis.keys("deny:rt:*") == [b"deny:rt:jti-1"]


def test_already_expired_token_is_not_stored(store, fake_redis):
    store.revoke_jti(jti="old", expires_at=NOW - timedelta(seconds=1))
    assert store.is_revoked("old") is False
    assert fake_redis.keys("deny:rt:*") == []
