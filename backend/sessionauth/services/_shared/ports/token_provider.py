from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from sessionauth.services._shared.errors import InvalidTokenError


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Identity carried by a session token.

    :ivar subject_id: Opaque user identifier (``sub``).
    :ivar email: Email of the user at issuance.
    :ivar issued_at: Issuance instant (UTC).
    :ivar expires_at: Expiry instant (UTC).
    """

    subject_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenProvider(Protocol):
    """Port for issuing and verifying signed session tokens.

    Implementations are pure: they never consult the revocation store.
    """

    def issue(self, *, subject_id: str, email: str) -> str: ...

    def validate(self, token: str) -> TokenClaims:
        """Return the claims of a well-signed, unexpired token.

        :raises InvalidTokenError: On any signature, structure or expiry failure.
        """
        ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(self, *, ttl: timedelta = timedelta(days=30)) -> None:
        self.now = datetime.now(tz=UTC)
        self.ttl = ttl
        self._seq = 0
        self._issued: dict[str, TokenClaims] = {}

    def issue(self, *, subject_id: str, email: str) -> str:
        self._seq += 1
        token = f"session.{subject_id}.{self._seq}"
        self._issued[token] = TokenClaims(
            subject_id=subject_id,
            email=email,
            issued_at=self.now,
            expires_at=self.now + self.ttl,
        )
        return token

    def validate(self, token: str) -> TokenClaims:
        claims = self._issued.get(token)
        if claims is None or claims.expires_at <= self.now:
            raise InvalidTokenError()
        return claims

    def advance(self, delta: timedelta) -> None:
        """Move the stub clock forward."""
        self.now += delta
