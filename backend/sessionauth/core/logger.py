"""JSON logging with request correlation and credential redaction.

Every record leaving the process is one JSON object on stdout. Records emitted
while serving a request carry its ``request_id``; each request also produces a
single ``request.completed`` line with status and latency.
"""

from __future__ import annotations

import json
import logging
import re
import sys
import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")

_ENVIRON_ID = "sessionauth.request_id"
_ENVIRON_START = "sessionauth.request_start"

# Attributes promoted to top-level JSON keys when present on a record.
EXTRA_KEYS = ("method", "path", "status", "elapsed_ms", "client_addr", "user_id")

# Three base64url segments starting with an encoded JSON header.
_JWT_RE = re.compile(r"eyJ[\w-]*\.[\w-]+\.[\w-]+")
REDACTED = "[redacted]"


class JSONFormatter(logging.Formatter):
    """Render log records as JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc_info"] = _JWT_RE.sub(REDACTED, self.formatException(record.exc_info))
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on every record (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


class RedactTokensFilter(logging.Filter):
    """Mask anything shaped like a signed token before it is written."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if _JWT_RE.search(message):
            record.msg = _JWT_RE.sub(REDACTED, message)
            record.args = None
        return True


def ensure_request_id() -> str:
    """Return the current request identifier, adopting or generating one.

    The id is pinned on the WSGI environ, so it lives exactly as long as the
    request even when the app context is shared.
    """
    if not has_request_context():
        return str(uuid4())
    environ = request.environ
    if _ENVIRON_ID not in environ:
        incoming = next((request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)), None)
        environ[_ENVIRON_ID] = incoming or str(uuid4())
    return environ[_ENVIRON_ID]


def configure_logging(level: str | int = "INFO") -> None:
    """Send root logging to stdout as JSON at ``level``."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    handler.addFilter(RedactTokensFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Correlate requests and log one access line per request."""

    access_log = logging.getLogger("sessionauth.access")

    @app.before_request
    def _start_request() -> None:
        request.environ[_ENVIRON_START] = time.perf_counter()
        ensure_request_id()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = request.environ.get(_ENVIRON_START)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2) if started else None
        access_log.info(
            "request.completed",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "elapsed_ms": elapsed_ms,
                "client_addr": request.remote_addr,
            },
        )
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id", "JSONFormatter", "RedactTokensFilter"]
