"""Convenience exports for application schemas."""

from __future__ import annotations

from .session import (
    CredentialsSchema,
    MessageSchema,
    TokenResponseSchema,
    TokenSchema,
    VerificationResponseSchema,
)

__all__ = [
    "CredentialsSchema",
    "TokenSchema",
    "MessageSchema",
    "TokenResponseSchema",
    "VerificationResponseSchema",
]
