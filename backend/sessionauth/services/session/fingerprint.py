"""Revocation-store keys derived from the serialized token."""

from __future__ import annotations

import hashlib


def token_fingerprint(token: str) -> str:
    """Return the SHA-256 hex digest of the token string.

    The digest covers the exact serialized form, not the claims, so two
    distinct token strings for the same subject never share a fingerprint.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
