# comments in English; reST docstrings
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from sessionauth.services._shared.errors import RevocationStoreUnavailable
from sessionauth.services._shared.ports import RevocationStore

log = logging.getLogger(__name__)

ACTIVE_MARKER = "active"


@dataclass(slots=True)
class RedisRevocationStore(RevocationStore):
    """
    Redis-backed liveness markers for session tokens.

    One key per active token fingerprint, ``session:active:<fingerprint>``,
    holding ``"active"`` with a TTL equal to the token validity window so the
    keyspace is bounded by the number of unexpired tokens.

    :param r: A Redis client (connects lazily).
    :param ttl: Lifetime of an activation marker.
    """

    r: redis.Redis
    ttl: timedelta = field(default=timedelta(days=30))

    @staticmethod
    def _k(fingerprint: str) -> str:
        return f"session:active:{fingerprint}"

    def _ttl_seconds(self) -> int:
        return max(1, int(self.ttl.total_seconds()))

    # -------------------- API ------------------------

    def activate(self, fingerprint: str) -> None:
        """Mark ``fingerprint`` active. Re-activating refreshes the TTL."""
        try:
            self.r.set(self._k(fingerprint), ACTIVE_MARKER, ex=self._ttl_seconds())
        except RedisError as exc:
            log.error("Revocation store write failed: op=activate", exc_info=True)
            raise RevocationStoreUnavailable() from exc

    def deactivate(self, fingerprint: str) -> None:
        """Drop the marker. Unknown fingerprints are a silent no-op."""
        try:
            self.r.delete(self._k(fingerprint))
        except RedisError as exc:
            log.error("Revocation store write failed: op=deactivate", exc_info=True)
            raise RevocationStoreUnavailable() from exc

    def is_active(self, fingerprint: str) -> bool:
        """Existence check; an unreachable store reads as inactive."""
        try:
            return cast(int, self.r.exists(self._k(fingerprint))) == 1
        except RedisError:
            log.error("Revocation store read failed, treating token as inactive", exc_info=True)
            return False

    def connection_count(self) -> int:
        try:
            info = cast(dict, self.r.info("clients"))
        except RedisError:
            log.error("Revocation store introspection failed", exc_info=True)
            return 0
        return int(info.get("connected_clients", 0))

    def health(self) -> bool:
        try:
            return bool(self.r.ping())
        except RedisError:
            log.error("Revocation store health check failed", exc_info=True)
            return False
