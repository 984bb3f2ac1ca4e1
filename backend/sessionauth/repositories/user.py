"""User repository over the ``users`` table."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from sessionauth.core.extensions import db
from sessionauth.models.user import User, normalize_email


class UserRepository:
    """Persistence-only repository for :class:`User`.

    It NEVER handles tokens or password hashing, only record lookup and
    insertion. The session defaults to the request-scoped Flask-SQLAlchemy
    session and is resolved on every call.
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else db.session

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == normalize_email(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get(self, user_id: str) -> User | None:
        """Fetch a user by id.

        :param user_id: Opaque identifier (token subject).
        :type user_id: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        return self.session.get(User, user_id)

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == normalize_email(email))
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Writes ----------------------------

    def add(self, *, email: str, password_hash: str) -> User:
        """Insert a user and commit.

        :raises sqlalchemy.exc.IntegrityError: When the email is already taken
            (unique constraint). The session is rolled back first.
        """
        user = User(email=email, password_hash=password_hash)
        self.session.add(user)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return user

    def delete(self, user_id: str) -> bool:
        """Remove a user. Outside the session lifecycle; used by tooling and tests."""
        user = self.get(user_id)
        if user is None:
            return False
        self.session.delete(user)
        self.session.commit()
        return True
