"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Loads .env in development (no-op when the file is absent)
load_dotenv()


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is missing or invalid."""


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer environment variable, raising on garbage."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {val!r}") from exc


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    JWT_SECRET_KEY: str | None
        HMAC secret used to sign auth tokens. There is no default: the
        application refuses to start without it.
    AUTH_TOKEN_TTL_SECONDS: int
        Token lifetime; also the auth cookie ``Max-Age``.
    JWT_ACCESS_COOKIE_NAME: str
        Name of the HttpOnly cookie carrying the token.
    JWT_COOKIE_SECURE / JWT_COOKIE_SAMESITE / JWT_COOKIE_CSRF_PROTECT:
        Cookie flags consumed by ``flask-jwt-extended`` cookie helpers.
    BCRYPT_ROUNDS: int
        bcrypt cost factor.
    USER_STORE_PATH: str
        JSON file holding registered users.
    REDIS_URL: str | None
        When set, revoked tokens are tracked in Redis instead of in-process.
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to the login endpoint.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Secrets / tokens
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    AUTH_TOKEN_TTL_SECONDS = env_int("AUTH_TOKEN_TTL_SECONDS", 2 * 60 * 60)

    # Cookie transport (flask-jwt-extended helpers)
    JWT_TOKEN_LOCATION = ["cookies", "headers"]
    JWT_ACCESS_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "rm_auth")
    JWT_ACCESS_COOKIE_PATH = "/"
    JWT_COOKIE_SECURE = env_bool("JWT_COOKIE_SECURE", True)
    JWT_COOKIE_SAMESITE = "Strict"
    JWT_COOKIE_CSRF_PROTECT = False

    # Password hashing
    BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 10)

    # Storage
    USER_STORE_PATH = os.getenv("USER_STORE_PATH", "data/db.json")
    REDIS_URL = os.getenv("REDIS_URL")

    # Rate limiting
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_ENABLED = True

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging, CORS & proxy
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5000")
    CORS_MAX_AGE = 600
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and allows the auth cookie over plain HTTP
    unless ``JWT_COOKIE_SECURE`` says otherwise.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    JWT_COOKIE_SECURE = env_bool("JWT_COOKIE_SECURE", False)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and a fixed signing secret.
    - Uses the cheapest bcrypt cost and disables rate limiting.
    - Never talks to Redis; the store path is overridden per test.
    """

    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = "testing-secret-key-that-is-long-enough-for-hs256"
    JWT_COOKIE_SECURE = False
    BCRYPT_ROUNDS = 4
    REDIS_URL = None
    USER_STORE_PATH = os.getenv("TEST_USER_STORE_PATH", "data/db.test.json")
    RATELIMIT_ENABLED = False
    USE_PROXYFIX = False
    LOG_LEVEL = "WARNING"
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug disabled and insists on ``Secure`` cookies.
    """

    DEBUG = False
    JWT_COOKIE_SECURE = True
    PROPAGATE_EXCEPTIONS = False


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
