"""Unit tests for the scrypt password hasher."""

from __future__ import annotations

import pytest

from sessionauth.infra.crypto.scrypt_password_hasher import ScryptPasswordHasher


@pytest.fixture()
def hasher() -> ScryptPasswordHasher:
    return ScryptPasswordHasher(method="scrypt:1024:8:1")


def test_hash_and_verify(hasher):
    digest = hasher.hash("secret123")

    assert digest.startswith("scrypt:")
    assert "secret123" not in digest
    assert hasher.verify(digest, "secret123") is True
    assert hasher.verify(digest, "secret124") is False


def test_same_password_gets_distinct_salts(hasher):
    assert hasher.hash("secret123") != hasher.hash("secret123")


def test_hash_rejects_empty_password(hasher):
    with pytest.raises(ValueError):
        hasher.hash("")


@pytest.mark.parametrize("digest", ["", "not-a-digest", "scrypt:bad$salt$hash"])
def test_verify_malformed_or_empty_digest_is_false(hasher, digest):
    assert hasher.verify(digest, "secret123") is False


def test_verify_empty_password_is_false(hasher):
    assert hasher.verify(hasher.hash("secret123"), "") is False
