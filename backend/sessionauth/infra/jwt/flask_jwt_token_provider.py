# sessionauth/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from sessionauth.services._shared.errors import InvalidTokenError
from sessionauth.services._shared.ports import TokenClaims, TokenProvider

log = logging.getLogger(__name__)


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Tokens are access-type JWTs carrying ``sub`` (user id) and ``email``; the
    library adds ``iat``, ``exp``, ``nbf`` and a random ``jti``, so two tokens
    for the same subject are distinct strings even within one second.

    .. note::
       Requires an active Flask app context with ``JWT_SECRET_KEY`` set.
    """

    expires_delta: timedelta = field(default=timedelta(days=30))

    def issue(self, *, subject_id: str, email: str) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        return cast(
            str,
            _create_access(
                identity=str(subject_id),
                additional_claims={"email": email},
                expires_delta=self.expires_delta,
                fresh=False,
            ),
        )

    def decode(self, token: str) -> dict[str, Any]:
        from flask_jwt_extended import decode_token

        try:
            return cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException) as exc:
            log.info("Token rejected: reason=%s", type(exc).__name__)
            raise InvalidTokenError() from exc

    def validate(self, token: str) -> TokenClaims:
        payload = self.decode(token)
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError()
        return TokenClaims(
            subject_id=subject,
            email=str(payload.get("email", "")),
            issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
        )
