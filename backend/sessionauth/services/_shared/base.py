# sessionauth/services/_shared/base.py
from __future__ import annotations

from sessionauth.core import errors as api_errors
from sessionauth.services._shared.errors import (
    InfrastructureError,
    InvalidTokenError,
    NotFoundError,
    ServiceError,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Centralize translation of domain errors to API errors.
    * Keep services thin, orchestration-only, no web/ORM leakage.
    """

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, NotFoundError):
            # → 404 Not Found
            return api_errors.NotFound(str(exc))

        if isinstance(exc, InvalidTokenError):
            # → 401, inactive and invalid tokens share one message
            return api_errors.Unauthorized(InvalidTokenError.message)

        if isinstance(exc, InfrastructureError):
            # → 503, a store outage is not a security verdict
            return api_errors.ServiceUnavailable()

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
