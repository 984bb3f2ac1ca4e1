"""User record consumed by the session lifecycle."""

from __future__ import annotations

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from sessionauth.core.extensions import db

from .base import OpaqueIdMixin, ReprMixin, TimestampMixin


def normalize_email(value: str) -> str:
    """Trim and lower-case an email for storage and lookup."""
    return value.strip().lower()


class User(OpaqueIdMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication identity.

    Fields
    ------
    id : str
        Opaque identifier, used as the token subject.
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    password_hash : str
        Salted scrypt digest. The core never mutates it after sign-up.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize email.

        :raises ValueError: If email is missing or blank.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Email is required.")
        return normalize_email(value)
