# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from blog_auth.services._shared.base import now_utc
from blog_auth.services._shared.errors import StorageError
from blog_auth.services._shared.ports import SessionRecord, SessionStore, as_utc


@dataclass(slots=True)
class RedisSessionStore(SessionStore):
    """
    Redis-backed session store.

    Layout: one hash per session (``sess:{id}``) expiring with the session,
    plus a per-user index set (``sess:u:{user_id}``). Index entries whose hash
    has expired are pruned lazily on read. Single instance only.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _k(session_id: str) -> str:
        return f"sess:{session_id}"

    @staticmethod
    def _ku(user_id: str) -> str:
        return f"sess:u:{user_id}"

    @staticmethod
    def _to_ts(dt: datetime) -> int:
        return int(as_utc(dt).timestamp())

    @staticmethod
    def _s(value: bytes | str) -> str:
        return value.decode() if isinstance(value, bytes) else value

    def _to_record(self, session_id: str, h: dict) -> SessionRecord:
        data = {self._s(k): self._s(v) for k, v in h.items()}
        return SessionRecord(
            id=session_id,
            user_id=data["user_id"],
            token_hash=data["token_hash"],
            expires_at=datetime.fromtimestamp(int(data["expires_at"]), tz=UTC),
            created_at=datetime.fromtimestamp(int(data["created_at"]), tz=UTC),
        )

    # -------------------- API ------------------------

    def insert(self, user_id: str, token_hash: str, expires_at: datetime) -> SessionRecord:
        session_id = str(uuid4())
        now = now_utc()
        ttl = max(1, self._to_ts(expires_at) - self._to_ts(now))
        key = self._k(session_id)
        try:
            pipe = self.r.pipeline(transaction=True)
            pipe.hset(
                key,
                mapping={
                    "user_id": user_id,
                    "token_hash": token_hash,
                    "expires_at": str(self._to_ts(expires_at)),
                    "created_at": str(self._to_ts(now)),
                },
            )
            pipe.expire(key, ttl)
            pipe.sadd(self._ku(user_id), session_id)
            pipe.execute()
        except RedisError as exc:
            raise StorageError("Could not persist session") from exc
        return SessionRecord(
            id=session_id,
            user_id=user_id,
            token_hash=token_hash,
            expires_at=datetime.fromtimestamp(self._to_ts(expires_at), tz=UTC),
            created_at=datetime.fromtimestamp(self._to_ts(now), tz=UTC),
        )

    def list_by_user(self, user_id: str) -> list[SessionRecord]:
        try:
            ids = [self._s(m) for m in self.r.smembers(self._ku(user_id))]
            if not ids:
                return []
            pipe = self.r.pipeline(transaction=False)
            for session_id in ids:
                pipe.hgetall(self._k(session_id))
            hashes = pipe.execute()

            records: list[SessionRecord] = []
            stale: list[str] = []
            for session_id, h in zip(ids, hashes, strict=True):
                if h:
                    records.append(self._to_record(session_id, h))
                else:
                    stale.append(session_id)
            if stale:
                self.r.srem(self._ku(user_id), *stale)
            return records
        except RedisError as exc:
            raise StorageError("Could not list sessions") from exc

    def delete(self, session_id: str) -> bool:
        """
        Remove one session.

        ``DEL`` is atomic: of two racing callers exactly one sees ``1``.
        """
        key = self._k(session_id)
        try:
            uid = self.r.hget(key, "user_id")
            removed = int(self.r.delete(key))
            if uid:
                self.r.srem(self._ku(self._s(uid)), session_id)
        except RedisError as exc:
            raise StorageError("Could not delete session") from exc
        return removed == 1

    def delete_all_by_user(self, user_id: str) -> int:
        k_user = self._ku(user_id)
        try:
            ids = [self._s(m) for m in self.r.smembers(k_user)]
            pipe = self.r.pipeline(transaction=True)
            if ids:
                pipe.delete(*[self._k(i) for i in ids])
            pipe.delete(k_user)
            results = pipe.execute()
        except RedisError as exc:
            raise StorageError("Could not revoke sessions") from exc
        return int(results[0]) if ids else 0

    def delete_expired(self, now: datetime) -> int:
        """
        Drop sessions whose ``expires_at`` is at or before ``now``.

        Redis already expires the hashes; this also cleans the user indexes
        and catches records outliving their stamp through clock skew.
        """
        cutoff = self._to_ts(now)
        deleted = 0
        try:
            for k_user in self.r.scan_iter(match=self._ku("*")):
                k_user = self._s(k_user)
                for member in self.r.smembers(k_user):
                    session_id = self._s(member)
                    exp = self.r.hget(self._k(session_id), "expires_at")
                    if exp is None:
                        self.r.srem(k_user, session_id)
                    elif int(self._s(exp)) <= cutoff:
                        deleted += int(self.r.delete(self._k(session_id)))
                        self.r.srem(k_user, session_id)
        except RedisError as exc:
            raise StorageError("Could not prune sessions") from exc
        return deleted
