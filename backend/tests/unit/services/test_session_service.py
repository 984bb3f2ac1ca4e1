# tests/unit/services/test_session_service.py
from __future__ import annotations

from datetime import timedelta

import pytest

from sessionauth.infra.crypto.scrypt_password_hasher import ScryptPasswordHasher
from sessionauth.repositories import UserRepository
from sessionauth.services._shared.errors import (
    IncorrectPasswordError,
    InactiveTokenError,
    InvalidTokenError,
    RevocationStoreUnavailable,
    UserDoesNotExistError,
    UserExistsError,
    UserNotFoundError,
)
from sessionauth.services._shared.ports import InMemoryRevocationStore, StubTokenProvider
from sessionauth.services.session import (
    CredentialsIn,
    SessionService,
    SessionTokenOut,
    TokenIn,
    token_fingerprint,
)
from tests.factories.user import UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def service(app) -> SessionService:
    """Build a SessionService wired to in-memory doubles and the SQLite user table."""
    return SessionService(
        users=UserRepository(),
        hasher=ScryptPasswordHasher(method="scrypt:1024:8:1"),
        tokens=StubTokenProvider(),
        revocations=InMemoryRevocationStore(),
    )


@pytest.fixture()
def user():
    return UserFactory(email="test@test.com", password="x")


def _sign_in(service: SessionService, email: str = "test@test.com", password: str = "x") -> str:
    return service.sign_in(CredentialsIn(email=email, password=password)).token


# -------------------------------- Sign-up --------------------------------- #
def test_sign_up_creates_user_with_hashed_password(service):
    out = service.sign_up(CredentialsIn(email="new@example.com", password="secret"))

    user = service.users.get(out.user_id)
    assert user is not None
    assert user.email == "new@example.com"
    assert user.password_hash != "secret"
    assert service.hasher.verify(user.password_hash, "secret")


def test_sign_up_duplicate_email(service, user):
    with pytest.raises(UserExistsError) as exc:
        service.sign_up(CredentialsIn(email="TEST@test.com ", password="other"))
    assert str(exc.value) == "User already exists"


def test_sign_up_does_not_sign_in(service):
    service.sign_up(CredentialsIn(email="new@example.com", password="secret"))
    assert service.revocations._active == set()


# -------------------------------- Sign-in --------------------------------- #
def test_sign_in_issues_and_activates_token(service, user):
    out = service.sign_in(CredentialsIn(email=user.email, password="x"))

    assert isinstance(out, SessionTokenOut)
    assert out.user_id == user.id
    assert service.revocations.is_active(token_fingerprint(out.token)) is True


def test_sign_in_distinguishes_unknown_email_and_wrong_password(service, user):
    with pytest.raises(UserDoesNotExistError) as unknown:
        service.sign_in(CredentialsIn(email="nobody@test.com", password="x"))
    with pytest.raises(IncorrectPasswordError) as wrong:
        service.sign_in(CredentialsIn(email=user.email, password="y"))

    assert str(unknown.value) == "User does not exist"
    assert str(wrong.value) == "Password is incorrect"


def test_each_sign_in_is_a_separate_session(service, user):
    first = _sign_in(service)
    second = _sign_in(service)

    assert first != second
    service.sign_out(TokenIn(token=first))

    assert service.verify(TokenIn(token=second)).user_id == user.id
    with pytest.raises(InactiveTokenError):
        service.verify(TokenIn(token=first))


def test_sign_in_does_not_hand_out_token_when_store_is_down(service, user):
    service.revocations.available = False

    with pytest.raises(RevocationStoreUnavailable):
        _sign_in(service)


# -------------------------------- Verify ---------------------------------- #
def test_verify_fresh_token(service, user):
    token = _sign_in(service)

    out = service.verify(TokenIn(token=token))

    assert out.valid is True
    assert out.user_id == user.id


def test_verify_is_read_only(service, user):
    token = _sign_in(service)
    before = set(service.revocations._active)

    service.verify(TokenIn(token=token))
    service.verify(TokenIn(token=token))

    assert service.revocations._active == before


def test_verify_well_signed_but_never_activated(service, user):
    token = service.tokens.issue(subject_id=user.id, email=user.email)

    with pytest.raises(InactiveTokenError):
        service.verify(TokenIn(token=token))


def test_verify_checks_liveness_before_signature(service, user):
    with pytest.raises(InactiveTokenError):
        service.verify(TokenIn(token="invalid-token"))


def test_verify_expired_but_active_token(service, user):
    token = _sign_in(service)
    service.tokens.advance(timedelta(days=30, seconds=1))

    with pytest.raises(InvalidTokenError) as exc:
        service.verify(TokenIn(token=token))
    assert not isinstance(exc.value, InactiveTokenError)


def test_verify_fails_closed_when_store_is_down(service, user):
    token = _sign_in(service)
    service.revocations.available = False

    with pytest.raises(InactiveTokenError):
        service.verify(TokenIn(token=token))


def test_verify_deleted_user(service, user):
    token = _sign_in(service)
    service.users.delete(user.id)

    with pytest.raises(UserNotFoundError) as exc:
        service.verify(TokenIn(token=token))
    assert str(exc.value) == "User not found"


# -------------------------------- Refresh --------------------------------- #
def test_refresh_invalidates_predecessor(service, user):
    old = _sign_in(service)

    new = service.refresh(TokenIn(token=old)).token

    assert new != old
    assert service.verify(TokenIn(token=new)).user_id == user.id
    with pytest.raises(InactiveTokenError):
        service.verify(TokenIn(token=old))


def test_refresh_does_not_check_liveness(service, user):
    """A signed-out but unexpired token can still be exchanged."""
    old = _sign_in(service)
    service.sign_out(TokenIn(token=old))

    new = service.refresh(TokenIn(token=old)).token

    assert service.verify(TokenIn(token=new)).valid is True


def test_refresh_rejects_invalid_and_expired(service, user):
    with pytest.raises(InvalidTokenError):
        service.refresh(TokenIn(token="invalid-token"))

    token = _sign_in(service)
    service.tokens.advance(timedelta(days=31))
    with pytest.raises(InvalidTokenError):
        service.refresh(TokenIn(token=token))


def test_refresh_deleted_user(service, user):
    token = _sign_in(service)
    service.users.delete(user.id)

    with pytest.raises(UserNotFoundError):
        service.refresh(TokenIn(token=token))
    assert service.revocations.is_active(token_fingerprint(token)) is True


def test_refresh_deactivates_before_activating(service, user):
    calls: list[tuple[str, str]] = []
    store = service.revocations
    original_activate, original_deactivate = store.activate, store.deactivate

    def activate(fp: str) -> None:
        calls.append(("activate", fp))
        original_activate(fp)

    def deactivate(fp: str) -> None:
        calls.append(("deactivate", fp))
        original_deactivate(fp)

    old = _sign_in(service)
    store.activate, store.deactivate = activate, deactivate

    new = service.refresh(TokenIn(token=old)).token

    assert calls == [
        ("deactivate", token_fingerprint(old)),
        ("activate", token_fingerprint(new)),
    ]


# -------------------------------- Sign-out -------------------------------- #
def test_sign_out_revokes(service, user):
    token = _sign_in(service)

    service.sign_out(TokenIn(token=token))

    with pytest.raises(InactiveTokenError):
        service.verify(TokenIn(token=token))


def test_sign_out_is_idempotent_and_accepts_any_string(service, user):
    token = _sign_in(service)

    service.sign_out(TokenIn(token=token))
    service.sign_out(TokenIn(token=token))
    service.sign_out(TokenIn(token="never-issued"))

    assert service.revocations._active == set()


def test_sign_out_reports_store_outage(service, user):
    token = _sign_in(service)
    service.revocations.available = False

    with pytest.raises(RevocationStoreUnavailable):
        service.sign_out(TokenIn(token=token))


# ------------------------------ Lifecycle --------------------------------- #
def test_full_lifecycle(service):
    service.sign_up(CredentialsIn(email="test@test.com", password="test"))
    t1 = _sign_in(service, password="test")
    assert service.verify(TokenIn(token=t1)).valid

    t2 = service.refresh(TokenIn(token=t1)).token
    with pytest.raises(InactiveTokenError):
        service.verify(TokenIn(token=t1))
    assert service.verify(TokenIn(token=t2)).valid

    service.sign_out(TokenIn(token=t2))
    with pytest.raises(InactiveTokenError):
        service.verify(TokenIn(token=t2))
