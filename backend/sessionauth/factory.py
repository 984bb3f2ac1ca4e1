"""Application factory wiring Flask extensions, services and blueprints."""

from __future__ import annotations

from typing import Any

from flask import Flask

from sessionauth.core.config import PLACEHOLDER_JWT_SECRET, BaseConfig, get_config
from sessionauth.core.logger import configure_logging, init_app as init_logging


def _check_secrets(app: Flask) -> None:
    """Refuse to serve production traffic with the placeholder signing key."""
    if app.config.get("ENV_NAME") != "production":
        return
    if app.config.get("JWT_SECRET_KEY") == PLACEHOLDER_JWT_SECRET:
        raise RuntimeError("JWT_SECRET_KEY must be set in production")


def _wire_services(app: Flask) -> None:
    """Build the session service from the adapters bound to ``app``."""
    from sessionauth.api.deps import SESSION_SERVICE_KEY
    from sessionauth.core.extensions import get_redis
    from sessionauth.infra.crypto.scrypt_password_hasher import ScryptPasswordHasher
    from sessionauth.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
    from sessionauth.infra.redis.redis_revocation_store import RedisRevocationStore
    from sessionauth.repositories import UserRepository
    from sessionauth.services.session import SessionService

    ttl = app.config["SESSION_TOKEN_TTL"]
    app.extensions[SESSION_SERVICE_KEY] = SessionService(
        users=UserRepository(),
        hasher=ScryptPasswordHasher(method=app.config.get("PASSWORD_HASH_METHOD", "scrypt")),
        tokens=JWTTokenProvider(expires_delta=ttl),
        revocations=RedisRevocationStore(r=get_redis(app), ttl=ttl),
    )


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    redis_client: Any | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    Parameters
    ----------
    config:
        Config class, object or import path. Defaults to the class selected by
        ``APP_ENV``.
    redis_client:
        Optional pre-built Redis client (tests pass ``fakeredis``).
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    _check_secrets(app)
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Proxy headers and the per-client limiter
    from sessionauth.core import ratelimit

    ratelimit.init_app(app)

    from sessionauth.core import extensions

    extensions.init_app(app, redis_client=redis_client)

    init_logging(app)

    from sessionauth.core import cors

    cors.init_app(app)

    _wire_services(app)

    from sessionauth.api import init_app as init_api

    init_api(app)

    from sessionauth.core import errors

    errors.init_app(app)

    from sessionauth import cli as app_cli

    app_cli.init_app(app)

    return app
