"""HTTP surface: blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from flask import Flask


def init_app(app: Flask) -> None:
    """Register every blueprint in :data:`sessionauth.api.endpoints.REGISTRY`.

    Session routes are served from the server root unless ``API_BASE_PREFIX``
    says otherwise.
    """

    from sessionauth.api.endpoints import REGISTRY

    base = app.config.get("API_BASE_PREFIX", "").strip("/")
    for bp, rel_prefix in REGISTRY:
        prefix = "/".join(s for s in (base, rel_prefix.strip("/")) if s)
        app.register_blueprint(bp, url_prefix=f"/{prefix}" if prefix else None)


__all__ = ["init_app"]
