"""
Password hashing with scrypt through ``werkzeug.security``.

Digests are self-describing (``scrypt:n:r:p$salt$hash``), so the salt and the
cost parameters travel with the stored value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from sessionauth.services._shared.ports import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScryptPasswordHasher(PasswordHasher):
    """
    Memory-hard password hashing.

    :param method: werkzeug method string, ``scrypt`` with optional ``:n:r:p``.
    :param salt_length: Length of the random salt.
    """

    method: str = "scrypt"
    salt_length: int = 16

    def hash(self, plaintext: str) -> str:
        """
        Hash a plain text password.

        :param plaintext: Password to hash.
        :returns: Digest with the random salt embedded.
        :raises ValueError: If the password is empty.
        """
        if not plaintext:
            raise ValueError("Password cannot be empty")
        return generate_password_hash(plaintext, method=self.method, salt_length=self.salt_length)

    def verify(self, digest: str, plaintext: str) -> bool:
        """
        Verify a plain text password against its digest.

        :param digest: Stored digest.
        :param plaintext: Candidate password.
        :returns: ``True`` if it matches; ``False`` otherwise, including when
            the digest is malformed.
        """
        if not digest or not plaintext:
            return False
        try:
            return bool(check_password_hash(digest, plaintext))
        except (ValueError, TypeError):
            logger.warning("Password verification failed on a malformed digest")
            return False
