"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are stable contracts between repositories, adapters and
application services.

The translation to HTTP responses is handled by
``sessionauth/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``str(exc)`` is the client-safe message.
    """

    message = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class AuthenticationError(ServiceError):
    """Credentials or a token failed a check."""


class InfrastructureError(ServiceError):
    """A backing store could not be reached. Never a security verdict."""

    message = "Service temporarily unavailable"


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found"


class UserNotFoundError(NotFoundError):
    """The subject of an otherwise valid token no longer exists."""

    def __init__(self, user_id: str) -> None:
        super().__init__(entity="User", key=user_id)


class UserExistsError(ServiceError):
    """Sign-up for an email that is already registered."""

    message = "User already exists"


class UserDoesNotExistError(AuthenticationError):
    """Sign-in for an email with no account."""

    message = "User does not exist"


class IncorrectPasswordError(AuthenticationError):
    """Sign-in with a known email and the wrong password."""

    message = "Password is incorrect"


class InvalidTokenError(AuthenticationError):
    """Token is malformed, wrongly signed or expired."""

    message = "Invalid token"


class InactiveTokenError(InvalidTokenError):
    """Token fingerprint is not marked active (signed out, refreshed or unknown)."""


class RevocationStoreUnavailable(InfrastructureError):
    """The revocation store rejected or timed out a bookkeeping write."""
