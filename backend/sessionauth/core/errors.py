"""Centralized JSON error handling for the API.

Every error body is ``{"message": <text>}``; the correlation id travels in the
``X-Request-ID`` response header. Server-side faults are logged with their
traceback and never leak details to clients.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException

from sessionauth.core.logger import ensure_request_id

log = logging.getLogger(__name__)


def message_response(message: str, status: int) -> tuple[Response, int]:
    """Return a ``{"message": ...}`` JSON response with ``status``."""
    return jsonify({"message": message}), int(status)


def first_validation_message(messages: Any) -> str:
    """
    Pick the message of the first failing field.

    Marshmallow records field errors in declaration order, so a body missing
    both ``email`` and ``password`` reports the email first.

    :param messages: ``ValidationError.messages`` (dict, list or str).
    :returns: A single human-readable message.
    """
    if isinstance(messages, dict):
        for value in messages.values():
            return first_validation_message(value)
        return "Invalid request body"
    if isinstance(messages, list | tuple):
        return first_validation_message(messages[0]) if messages else "Invalid request body"
    return str(messages)


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier used in logs. Defaults to ``"bad_request"``.
    """

    def __init__(self, message: str, status_code: int = 400, code: str = "bad_request") -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code


# Domain conveniences
class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Unauthorized(APIError):
    """401 when a token fails a check."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


class ServiceUnavailable(APIError):
    """503 when a backing store is unreachable."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            message, status_code=HTTPStatus.SERVICE_UNAVAILABLE, code="service_unavailable"
        )


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Request-body validation failures are ``400`` with the first field message.
    - Service errors are translated by ``BaseService.translate_exceptions``.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """
    from sessionauth.core.ratelimit import RATE_LIMIT_MESSAGE
    from sessionauth.services._shared.base import BaseService
    from sessionauth.services._shared.errors import ServiceError

    def _log(status: int, code: str, message: str, *, exc_info: bool = False) -> None:
        level = log.error if status >= 500 else log.warning
        level(
            "APIError: code=%s status=%s msg=%s request_id=%s",
            code,
            status,
            message,
            ensure_request_id(),
            exc_info=exc_info,
        )

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _log(err.status_code, err.code, err.message)
        return message_response(err.message, err.status_code)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if not isinstance(translated, APIError):  # pragma: no cover - every ServiceError maps
            raise err
        _log(
            translated.status_code,
            translated.code,
            translated.message,
            exc_info=translated.status_code >= 500,
        )
        return message_response(translated.message, translated.status_code)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        message = first_validation_message(err.messages)
        _log(HTTPStatus.BAD_REQUEST, "validation_error", message)
        return message_response(message, HTTPStatus.BAD_REQUEST)

    @app.errorhandler(HTTPStatus.TOO_MANY_REQUESTS)
    def handle_rate_limited(err: HTTPException):
        _log(HTTPStatus.TOO_MANY_REQUESTS, "too_many_requests", str(err.description))
        return jsonify({"error": RATE_LIMIT_MESSAGE}), HTTPStatus.TOO_MANY_REQUESTS

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        _log(status, HTTPStatus(status).name.lower(), message)
        return message_response(message, status)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # E.g., transient DB connectivity
        _log(HTTPStatus.SERVICE_UNAVAILABLE, "service_unavailable", "database error", exc_info=True)
        return message_response("Service temporarily unavailable", HTTPStatus.SERVICE_UNAVAILABLE)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        _log(HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", repr(err), exc_info=True)
        return message_response("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR)
