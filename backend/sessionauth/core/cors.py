"""Cross-origin policy for browser clients."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def allowed_origins(raw: str | None) -> list[str] | str:
    """Parse ``CORS_ORIGINS``; blank or ``*`` means any origin."""
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    return "*" if not origins or "*" in origins else origins


def init_app(app: Flask) -> None:
    """Apply the CORS policy to every route.

    Credentialed requests are only allowed for an explicit origin list. The
    bearer token travels in ``Authorization`` and the correlation id is
    readable by the browser.
    """
    origins = allowed_origins(app.config.get("CORS_ORIGINS"))
    CORS(
        app,
        origins=origins,
        methods=["GET", "POST", "OPTIONS"],
        supports_credentials=origins != "*",
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
