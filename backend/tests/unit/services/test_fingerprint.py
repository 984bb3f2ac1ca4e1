"""Unit tests for token fingerprints."""

from __future__ import annotations

import hashlib

from sessionauth.services.session import token_fingerprint


def test_fingerprint_is_sha256_of_token_string():
    token = "header.payload.signature"
    assert token_fingerprint(token) == hashlib.sha256(token.encode()).hexdigest()
    assert len(token_fingerprint(token)) == 64


def test_distinct_tokens_have_distinct_fingerprints():
    assert token_fingerprint("a.b.c") != token_fingerprint("a.b.d")


def test_fingerprint_is_deterministic():
    assert token_fingerprint("a.b.c") == token_fingerprint("a.b.c")
