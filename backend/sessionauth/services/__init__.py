"""Service layer public API.

Re-exports
----------
- Base primitives (from ``sessionauth.services._shared.base``)
    * :class:`BaseService`

- Session service (from ``sessionauth.services.session``)
    * :class:`SessionService`
    * DTOs: :class:`CredentialsIn`, :class:`TokenIn`, :class:`SignUpOut`,
      :class:`SessionTokenOut`, :class:`VerificationOut`
"""

from __future__ import annotations

from ._shared.base import BaseService
from .session import (
    CredentialsIn,
    SessionService,
    SessionTokenOut,
    SignUpOut,
    TokenIn,
    VerificationOut,
)

__all__ = [
    "BaseService",
    "SessionService",
    "CredentialsIn",
    "TokenIn",
    "SignUpOut",
    "SessionTokenOut",
    "VerificationOut",
]
