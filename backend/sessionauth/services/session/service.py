# sessionauth/services/session/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from sessionauth.repositories.user import UserRepository
from sessionauth.services._shared.base import BaseService
from sessionauth.services._shared.errors import (
    IncorrectPasswordError,
    InactiveTokenError,
    UserDoesNotExistError,
    UserExistsError,
    UserNotFoundError,
)
from sessionauth.services._shared.ports import (
    PasswordHasher,
    RevocationStore,
    TokenClaims,
    TokenProvider,
)
from sessionauth.services.session.dto import (
    CredentialsIn,
    SessionTokenOut,
    SignUpOut,
    TokenIn,
    VerificationOut,
)
from sessionauth.services.session.fingerprint import token_fingerprint

log = logging.getLogger(__name__)


class SessionService(BaseService):
    """
    Session lifecycle service (sign-up / sign-in / refresh / verify / sign-out).

    A token moves ``NONEXISTENT → ACTIVE → (REFRESHED | REVOKED)`` and never
    comes back: its fingerprint is activated once, at issuance, and only ever
    deactivated afterwards.

    A token is authoritatively valid only when it is cryptographically valid
    (checked by the :class:`TokenProvider`) **and** its fingerprint is active
    in the :class:`RevocationStore`. The provider stays pure; this service
    owns the liveness bookkeeping.

    Concurrency
    -----------
    Two concurrent refreshes of the same token can both succeed and leave two
    active successors. There is no per-token serialization.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenProvider,
        revocations: RevocationStore,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param users: User record lookup and insertion.
        :param hasher: Credential hashing/verification.
        :param tokens: Adapter for issuing/verifying session tokens.
        :param revocations: Liveness markers per token fingerprint.
        """
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.revocations = revocations

    # ------------------------------------------------------------------ #
    # Sign-up
    # ------------------------------------------------------------------ #

    def sign_up(self, dto: CredentialsIn) -> SignUpOut:
        """
        Create an account.

        :raises UserExistsError: If the email is already registered.
        """
        if self.users.exists_by_email(dto.email):
            raise UserExistsError()

        digest = self.hasher.hash(dto.password)
        try:
            user = self.users.add(email=dto.email, password_hash=digest)
        except IntegrityError as exc:
            # Lost a race with a concurrent sign-up for the same email.
            raise UserExistsError() from exc

        log.info("User created", extra={"user_id": user.id})
        return SignUpOut(user_id=user.id)

    # ------------------------------------------------------------------ #
    # Sign-in
    # ------------------------------------------------------------------ #

    def sign_in(self, dto: CredentialsIn) -> SessionTokenOut:
        """
        Verify credentials, then issue and activate a token.

        :raises UserDoesNotExistError: Unknown email.
        :raises IncorrectPasswordError: Known email, wrong password.
        :raises RevocationStoreUnavailable: Activation could not be confirmed;
            the token is not handed out.
        """
        user = self.users.get_by_email(dto.email)
        if user is None:
            raise UserDoesNotExistError()
        if not self.hasher.verify(user.password_hash, dto.password):
            log.warning("Sign-in with incorrect password", extra={"user_id": user.id})
            raise IncorrectPasswordError()

        token = self.tokens.issue(subject_id=user.id, email=user.email)
        self.revocations.activate(token_fingerprint(token))

        log.info("User logged in", extra={"user_id": user.id})
        return SessionTokenOut(token=token, user_id=user.id)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: TokenIn) -> SessionTokenOut:
        """
        Exchange a cryptographically valid token for a new one.

        Liveness of the input token is not consulted. The old fingerprint is
        deactivated **before** the new one is activated: a failure between the
        two writes leaves no active token rather than two.

        :raises InvalidTokenError: Bad signature, structure or expiry.
        :raises UserNotFoundError: The subject no longer exists.
        :raises RevocationStoreUnavailable: A bookkeeping write failed.
        """
        claims = self.tokens.validate(dto.token)
        user = self.users.get(claims.subject_id)
        if user is None:
            raise UserNotFoundError(claims.subject_id)

        new_token = self.tokens.issue(subject_id=user.id, email=user.email)
        self.revocations.deactivate(token_fingerprint(dto.token))
        self.revocations.activate(token_fingerprint(new_token))

        log.info("Token refreshed", extra={"user_id": user.id})
        return SessionTokenOut(token=new_token, user_id=user.id)

    # ------------------------------------------------------------------ #
    # Verify
    # ------------------------------------------------------------------ #

    def verify(self, dto: TokenIn) -> VerificationOut:
        """
        Authoritative validity check. Read-only.

        Checks run in order: liveness (fail-closed), signature/expiry, subject
        existence.

        :raises InactiveTokenError: Fingerprint not active, or store unreachable.
        :raises InvalidTokenError: Bad signature, structure or expiry.
        :raises UserNotFoundError: The subject no longer exists.
        """
        if not self.revocations.is_active(token_fingerprint(dto.token)):
            raise InactiveTokenError()

        claims: TokenClaims = self.tokens.validate(dto.token)
        if self.users.get(claims.subject_id) is None:
            raise UserNotFoundError(claims.subject_id)

        return VerificationOut(user_id=claims.subject_id)

    # ------------------------------------------------------------------ #
    # Sign-out
    # ------------------------------------------------------------------ #

    def sign_out(self, dto: TokenIn) -> None:
        """
        Deactivate the token's fingerprint. Idempotent.

        The token is not decoded: any string can be signed out, and signing
        out an unknown or already inactive token succeeds.

        :raises RevocationStoreUnavailable: The write could not be confirmed.
        """
        self.revocations.deactivate(token_fingerprint(dto.token))
        log.info("User logged out")
