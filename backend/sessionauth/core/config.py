"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Selects the config class
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

PLACEHOLDER_JWT_SECRET: Final[str] = "CHANGE_ME_JWT"

# Loads .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag; ``1/true/yes/y/on`` (any case) are true."""
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def env_float(name: str, default: float) -> float:
    """Parse a float from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return float(val)


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints. Session routes live at the
        server root, so this is empty by default.
    SECRET_KEY: str
        Flask secret. Defaults to a development-safe placeholder.
    JWT_SECRET_KEY: str
        Key used by ``flask-jwt-extended`` to sign session tokens. Read once at
        startup; never rotated within a process lifetime.
    JWT_ALGORITHM: str
        Signing algorithm for session tokens.
    SESSION_TOKEN_TTL: datetime.timedelta
        Fixed validity window of a session token. Also used as the TTL of the
        revocation markers in Redis.
    PASSWORD_HASH_METHOD: str
        Werkzeug hashing method for stored passwords (``scrypt`` by default).
    SQLALCHEMY_DATABASE_URI: str
        Connection string of the user record store.
    REDIS_URL: str
        Connection string of the revocation store (and rate-limit counters).
    REDIS_SOCKET_TIMEOUT: float
        Upper bound, in seconds, for a single Redis round trip.
    REDIS_RETRIES: int
        Number of retries (exponential backoff) on transient Redis errors.
    RATELIMIT_ENABLED: bool
        Attaches the per-client request limiter. Only production enables it.
    RATELIMIT_DEFAULT: str
        Limit applied to every route, keyed by client address.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes. Nothing below the application factory
    reads the environment directly.
    """

    ENV_NAME = "development"
    API_BASE_PREFIX = ""
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY") or os.getenv("JWT_SECRET") or PLACEHOLDER_JWT_SECRET
    JWT_ALGORITHM = "HS256"
    JWT_DECODE_LEEWAY = 0
    SESSION_TOKEN_TTL = timedelta(days=30)
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # User record store
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Revocation store
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    REDIS_SOCKET_TIMEOUT = env_float("REDIS_SOCKET_TIMEOUT", 2.0)
    REDIS_RETRIES = env_int("REDIS_RETRIES", 2)

    # Rate limiting (client address, Redis-backed)
    RATELIMIT_ENABLED = False
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "100 per 15 minutes")
    RATELIMIT_STORAGE_URI = REDIS_URL
    RATELIMIT_HEADERS_ENABLED = True
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # Flask built-ins
    PROPAGATE_EXCEPTIONS = False
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default. The limiter stays detached.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Keeps in-process rate-limit storage so no Redis is needed for counters.
    """

    ENV_NAME = "testing"
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = "testing-jwt-secret"
    PASSWORD_HASH_METHOD = "scrypt:1024:8:1"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    RATELIMIT_STORAGE_URI = "memory://"
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Attaches the rate limiter and refuses the placeholder signing key (see
    :func:`sessionauth.factory.create_app`).
    """

    ENV_NAME = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    RATELIMIT_ENABLED = True


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
