# sessionauth/services/session/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class CredentialsIn:
    """
    Input DTO for sign-up and sign-in.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be hashed or verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class TokenIn:
    """
    Input DTO for refresh, verify and sign-out.

    :param token: Encoded session token.
    :type token: str
    """

    token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignUpOut:
    """
    Output DTO for a created account.

    :param user_id: Identifier of the new user.
    :type user_id: str
    """

    user_id: str


@dataclass(frozen=True, slots=True)
class SessionTokenOut:
    """
    Output DTO carrying a freshly activated session token.

    :param token: Encoded session token.
    :type token: str
    :param user_id: Token subject.
    :type user_id: str
    """

    token: str
    user_id: str


@dataclass(frozen=True, slots=True)
class VerificationOut:
    """
    Output DTO for a successful verification.

    :param user_id: Token subject.
    :type user_id: str
    :param valid: Always ``True``; failures raise instead.
    :type valid: bool
    """

    user_id: str
    valid: bool = True
