from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for salted, memory-hard password hashing."""

    def hash(self, plaintext: str) -> str:
        """Return a self-describing digest with the salt embedded."""
        ...

    def verify(self, digest: str, plaintext: str) -> bool:
        """Compare in constant time. Malformed digests yield ``False``."""
        ...
