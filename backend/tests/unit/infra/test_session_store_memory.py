"""Contract checks for :class:`InMemorySessionStore`."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from blog_auth.services._shared.ports import InMemorySessionStore


def test_insert_list_delete_cycle() -> None:
    store = InMemorySessionStore()
    exp = datetime.now(UTC) + timedelta(days=1)
    a = store.insert("u1", "a", exp)
    store.insert("u1", "b", exp)
    store.insert("u2", "c", exp)

    assert {r.token_hash for r in store.list_by_user("u1")} == {"a", "b"}
    assert store.delete(a.id) is True
    assert store.delete(a.id) is False
    assert store.delete_all_by_user("u1") == 1
    assert store.delete_all_by_user("u1") == 0
    assert len(store) == 1


def test_delete_expired_boundary_is_inclusive() -> None:
    store = InMemorySessionStore()
    now = datetime.now(UTC)
    store.insert("u1", "due", now)
    keep = store.insert("u1", "later", now + timedelta(seconds=1))

    assert store.delete_expired(now) == 1
    assert [r.id for r in store.list_by_user("u1")] == [keep.id]


def test_naive_expiry_is_treated_as_utc() -> None:
    store = InMemorySessionStore()
    naive = datetime(2030, 1, 1, 12, 0, 0)

    rec = store.insert("u1", "h", naive)

    assert rec.expires_at == datetime(2030, 1, 1, 12, 0, 0, tzinfo=UTC)
