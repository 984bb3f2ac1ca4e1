"""
sessionauth.services._shared.ports
==================================

Collection of *ports* (hexagonal interfaces) that define the contracts for
session token management.

These ports decouple the service layer from concrete implementations of
token signing, password hashing and revocation bookkeeping.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider` and :class:`~.TokenClaims`: JWT issuing
    and verification.

- :mod:`revocation_store`:
    Defines :class:`~.RevocationStore`: liveness markers per token fingerprint.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`: credential hashing and verification.

Design Notes
------------
Concrete adapters (Redis, Flask-JWT-Extended, werkzeug scrypt) implement
these interfaces under ``sessionauth.infra``. In-memory doubles live next to
their port for unit tests.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher
from .revocation_store import InMemoryRevocationStore, RevocationStore
from .token_provider import StubTokenProvider, TokenClaims, TokenProvider

__all__ = [
    "PasswordHasher",
    "RevocationStore",
    "InMemoryRevocationStore",
    "TokenProvider",
    "TokenClaims",
    "StubTokenProvider",
]
