"""Request helpers shared by the route modules."""

from __future__ import annotations

from typing import Any, cast

from flask import Response, current_app, jsonify, request

from sessionauth.services.session import SessionService

SESSION_SERVICE_KEY = "session_service"


def get_session_service() -> SessionService:
    """Return the session service wired by the application factory."""

    return cast(SessionService, current_app.extensions[SESSION_SERVICE_KEY])


def json_body() -> dict[str, Any]:
    """Return the JSON object sent by the client; anything else reads as ``{}``.

    A missing, malformed or non-object body then fails schema validation with
    the usual "field is required" message instead of a parser error.
    """

    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def bearer_token() -> str | None:
    """Extract the credential from ``Authorization: Bearer <token>``.

    The header is split on whitespace and the second segment is the token,
    whatever the scheme word says.
    """

    parts = request.headers.get("Authorization", "").split()
    return parts[1] if len(parts) >= 2 else None


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Serialize ``payload`` as a JSON response with ``status``."""

    response = jsonify(payload)
    response.status_code = status
    return response
