"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import atexit
import logging

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy
from redis.backoff import ExponentialBackoff  # type: ignore[import-untyped]
from redis.exceptions import ConnectionError as RedisConnectionError  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from redis.exceptions import TimeoutError as RedisTimeoutError  # type: ignore[import-untyped]
from redis.retry import Retry  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
jwt = JWTManager()


def build_redis_client(app: Flask) -> redis.Redis:
    """Create the process-wide Redis client from application config.

    The client connects lazily on its first command. Every round trip is
    bounded by ``REDIS_SOCKET_TIMEOUT`` and transient connection/timeout
    errors are retried ``REDIS_RETRIES`` times with exponential backoff.
    """
    timeout = float(app.config.get("REDIS_SOCKET_TIMEOUT", 2.0))
    retries = int(app.config.get("REDIS_RETRIES", 2))
    return redis.Redis.from_url(
        app.config["REDIS_URL"],
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
        retry=Retry(ExponentialBackoff(cap=1.0, base=0.05), retries),
        retry_on_error=[RedisConnectionError, RedisTimeoutError],
        decode_responses=False,
    )


def init_app(app: Flask, *, redis_client: redis.Redis | None = None) -> None:
    """Initialize SQLAlchemy, JWT and the Redis client.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`sessionauth.models` package so SQLAlchemy metadata is complete.
    redis_client: redis.Redis | None
        Pre-built client (tests inject ``fakeredis``). When omitted a client is
        built from ``REDIS_URL`` and closed at interpreter exit.
    """
    db.init_app(app)

    # Ensure models are imported so create_all sees metadata
    from sessionauth import models as _models  # noqa: F401

    jwt.init_app(app)

    if redis_client is None:
        redis_client = build_redis_client(app)
        atexit.register(redis_client.close)
        try:
            redis_client.ping()
        except RedisError:
            # The service still starts: verification fails closed and /health reports it.
            log.warning("Redis is unreachable at startup: url=%s", app.config.get("REDIS_URL"))
    app.extensions["redis_client"] = redis_client


def get_redis(app: Flask) -> redis.Redis:
    """Return the Redis client bound to ``app``."""
    client = app.extensions.get("redis_client")
    if client is None:
        raise RuntimeError("Redis client is not initialized. Call init_app() first.")
    return client
