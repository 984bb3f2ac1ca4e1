"""Blueprint package bundling the service routes."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .health import bp as health_bp  # noqa: E402
from .sessions import bp as sessions_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_base)
REGISTRY: list[tuple[Blueprint, str]] = [
    (sessions_bp, ""),  # -> /, /signup, /signin, /refresh-token, /verify-token, /signout
    (health_bp, ""),  # -> /health
]
