"""Health check endpoint."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app
from sqlalchemy import text

from sessionauth.api.deps import get_session_service, json_response
from sessionauth.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health")
def healthcheck():
    """Return revocation store and database health information."""

    revocations = get_session_service().revocations
    redis_ok = revocations.health()

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except Exception:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    healthy = redis_ok and db_status == "ok"
    payload = {
        "status": "ok" if healthy else "degraded",
        "redis": "ok" if redis_ok else "fail",
        "redis_connections": revocations.connection_count() if redis_ok else 0,
        "db": db_status,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=HTTPStatus.OK if healthy else HTTPStatus.SERVICE_UNAVAILABLE)
