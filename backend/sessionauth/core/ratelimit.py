"""Per-client request limiting and proxy header handling.

Requests are counted per client address. Behind a reverse proxy the address
comes from ``X-Forwarded-For`` (one trusted hop, via
:class:`werkzeug.middleware.proxy_fix.ProxyFix`), otherwise every client would
share the proxy's bucket.
"""

from __future__ import annotations

from flask import Flask, current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.middleware.proxy_fix import ProxyFix

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def _default_limit() -> str:
    return current_app.config.get("RATELIMIT_DEFAULT", "100 per 15 minutes")


# Storage and the enabled flag come from ``RATELIMIT_*`` config keys; the limit
# itself is read from the current app on every request.
limiter = Limiter(key_func=get_remote_address, default_limits=[_default_limit])


def init_app(app: Flask) -> None:
    """Apply ``ProxyFix`` when enabled and bind the limiter.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``USE_PROXYFIX`` and ``RATELIMIT_*`` settings are
        consulted. Only production sets ``RATELIMIT_ENABLED``.
    """
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    app.config.setdefault("RATELIMIT_SWALLOW_ERRORS", True)
    limiter.init_app(app)
    if app.config.get("RATELIMIT_ENABLED"):
        app.logger.info("Rate limiting attached: %s", app.config.get("RATELIMIT_DEFAULT"))


__all__ = ["limiter", "init_app", "RATE_LIMIT_MESSAGE"]
