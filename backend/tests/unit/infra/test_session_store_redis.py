# tests/unit/infra/test_session_store_redis.py
"""
Unit tests for RedisSessionStore using fakeredis.

These tests exercise the main flows:
- insert + list_by_user
- delete (single winner)
- delete_all_by_user
- delete_expired and index cleanup
- RedisError wrapping
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import fakeredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from blog_auth.infra.redis import RedisSessionStore
from blog_auth.services._shared.errors import StorageError


def _now() -> datetime:
    """Return a timezone-aware UTC "now"."""
    return datetime.now(UTC)


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def store(fake_redis):
    """Provide a RedisSessionStore backed by FakeRedis."""
    return RedisSessionStore(r=fake_redis)


def test_insert_then_list(store, fake_redis):
    exp = _now() + timedelta(days=7)

    rec = store.insert("u1", "hash-1", exp)

    records = store.list_by_user("u1")
    assert [r.id for r in records] == [rec.id]
    assert records[0].token_hash == "hash-1"
    assert records[0].expires_at == exp.replace(microsecond=0)
    assert 0 < fake_redis.ttl(f"sess:{rec.id}") <= 7 * 24 * 3600
    assert fake_redis.sismember("sess:u:u1", rec.id)


def test_insert_does_not_deduplicate(store):
    exp = _now() + timedelta(days=1)
    store.insert("u1", "same", exp)
    store.insert("u1", "same", exp)

    assert len(store.list_by_user("u1")) == 2


def test_list_is_scoped_per_user(store):
    exp = _now() + timedelta(days=1)
    store.insert("u1", "a", exp)
    store.insert("u2", "b", exp)

    assert {r.token_hash for r in store.list_by_user("u1")} == {"a"}
    assert store.list_by_user("nobody") == []


def test_delete_has_a_single_winner(store, fake_redis):
    rec = store.insert("u1", "h", _now() + timedelta(days=1))

    assert store.delete(rec.id) is True
    assert store.delete(rec.id) is False
    assert store.list_by_user("u1") == []
    assert not fake_redis.sismember("sess:u:u1", rec.id)


def test_delete_all_by_user_counts(store):
    exp = _now() + timedelta(days=1)
    for i in range(3):
        store.insert("u1", f"h{i}", exp)
    store.insert("u2", "keep", exp)

    assert store.delete_all_by_user("u1") == 3
    assert store.delete_all_by_user("u1") == 0
    assert len(store.list_by_user("u2")) == 1


def test_list_prunes_index_entries_whose_hash_expired(store, fake_redis):
    rec = store.insert("u1", "h", _now() + timedelta(days=1))
    fake_redis.delete(f"sess:{rec.id}")  # simulate TTL expiry

    assert store.list_by_user("u1") == []
    assert fake_redis.scard("sess:u:u1") == 0


def test_delete_expired_uses_the_stamped_expiry(store):
    now = _now()
    store.insert("u1", "old", now + timedelta(hours=1))
    fresh = store.insert("u1", "fresh", now + timedelta(days=7))

    deleted = store.delete_expired(now + timedelta(days=1))

    assert deleted == 1
    assert [r.id for r in store.list_by_user("u1")] == [fresh.id]


def test_redis_errors_become_storage_errors():
    broken = MagicMock()
    broken.smembers.side_effect = RedisConnectionError("down")
    store = RedisSessionStore(r=broken)

    with pytest.raises(StorageError) as exc_info:
        store.list_by_user("u1")

    assert isinstance(exc_info.value.__cause__, RedisConnectionError)
