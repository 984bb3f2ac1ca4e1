from __future__ import annotations

from typing import Protocol

from sessionauth.services._shared.errors import RevocationStoreUnavailable


class RevocationStore(Protocol):
    """
    Liveness bookkeeping for issued session tokens, keyed by fingerprint.

    Contract
    --------
    - ``activate`` and ``deactivate`` are idempotent and raise
      :class:`RevocationStoreUnavailable` when the write cannot be confirmed.
    - ``is_active`` fails closed: an unreachable store answers ``False``.
    - ``connection_count`` and ``health`` are introspection only.
    """

    def activate(self, fingerprint: str) -> None: ...
    def deactivate(self, fingerprint: str) -> None: ...
    def is_active(self, fingerprint: str) -> bool: ...
    def connection_count(self) -> int: ...
    def health(self) -> bool: ...


class InMemoryRevocationStore(RevocationStore):
    """Process-local revocation store for unit tests.

    ``available = False`` simulates an outage with the same failure semantics
    as the Redis adapter.
    """

    def __init__(self) -> None:
        self._active: set[str] = set()
        self.available = True

    def _ensure_available(self) -> None:
        if not self.available:
            raise RevocationStoreUnavailable()

    def activate(self, fingerprint: str) -> None:
        self._ensure_available()
        self._active.add(fingerprint)

    def deactivate(self, fingerprint: str) -> None:
        self._ensure_available()
        self._active.discard(fingerprint)

    def is_active(self, fingerprint: str) -> bool:
        return self.available and fingerprint in self._active

    def connection_count(self) -> int:
        return 1 if self.available else 0

    def health(self) -> bool:
        return self.available
