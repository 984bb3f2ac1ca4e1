"""Session lifecycle service package."""

from __future__ import annotations

from .dto import CredentialsIn, SessionTokenOut, SignUpOut, TokenIn, VerificationOut
from .fingerprint import token_fingerprint
from .service import SessionService

__all__ = [
    "SessionService",
    "CredentialsIn",
    "TokenIn",
    "SignUpOut",
    "SessionTokenOut",
    "VerificationOut",
    "token_fingerprint",
]
