"""Unit tests for the :class:`User` model."""

from __future__ import annotations

import pytest

from sessionauth.models import User
from sessionauth.models.base import new_id
from sessionauth.models.user import normalize_email
from tests.factories.user import UserFactory


def test_email_is_normalized(session):
    user = User(email="  Person@Example.COM ", password_hash="x")
    assert user.email == "person@example.com"


@pytest.mark.parametrize("value", ["", "   ", None])
def test_blank_email_rejected(session, value):
    with pytest.raises(ValueError):
        User(email=value, password_hash="x")


def test_opaque_ids_are_unique_hex():
    first, second = new_id(), new_id()
    assert first != second
    assert len(first) == 32
    int(first, 16)


def test_factory_persists_timestamps(session):
    user = UserFactory()
    assert user.id
    assert user.created_at is not None
    assert "User" in repr(user)


def test_normalize_email():
    assert normalize_email(" A@B.C ") == "a@b.c"
