"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from restaurant_auth.core.config import ConfigurationError
from restaurant_auth.infra.crypto.bcrypt_password_hasher import BcryptPasswordHasher
from restaurant_auth.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec, TokenSettings
from restaurant_auth.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from restaurant_auth.infra.storage.json_user_store import JsonFileUserStore
from restaurant_auth.services._shared.ports import (
    Clock,
    InMemoryDenylistStore,
    SystemClock,
    TokenDenylistStore,
)
from restaurant_auth.services.auth.service import AuthService

# Global singletons (import-safe)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def init_app(app: Flask, *, clock: Clock | None = None) -> None:
    """Initialize JWT cookie helpers, rate limiting and the auth service graph.

    Parameters
    ----------
    app: flask.Flask
        Application whose config drives the wiring.
    clock: Clock, optional
        Time source shared by the codec, the denylist and the service.
        Defaults to :class:`SystemClock`.

    Raises
    ------
    ConfigurationError
        If the signing secret is missing or Redis is configured but
        unreachable. The application must not start half-wired.
    """
    jwt.init_app(app)
    limiter.init_app(app)

    clock = clock or SystemClock()
    codec = PyJWTTokenCodec(
        TokenSettings(
            secret=app.config.get("JWT_SECRET_KEY"),
            ttl=timedelta(seconds=int(app.config.get("AUTH_TOKEN_TTL_SECONDS", 7200))),
        ),
        clock=clock,
    )
    hasher = BcryptPasswordHasher(rounds=int(app.config.get("BCRYPT_ROUNDS", 10)))

    denylist: TokenDenylistStore
    redis_url = app.config.get("REDIS_URL")
    if redis_url:
        client = redis.Redis.from_url(redis_url)
        try:
            client.ping()
        except RedisError as exc:
            raise ConfigurationError(f"Failed to connect to Redis at {redis_url!r}") from exc
        denylist = RedisTokenDenylistStore(client)
    else:
        denylist = InMemoryDenylistStore(clock=clock)

    user_store = JsonFileUserStore(app.config["USER_STORE_PATH"])

    app.extensions["auth_service"] = AuthService(
        user_store=user_store,
        hasher=hasher,
        codec=codec,
        denylist=denylist,
        clock=clock,
    )
    app.logger.info(
        "extensions.ready",
        extra={"event": "startup", "reason": "redis" if redis_url else "memory"},
    )


def get_auth_service() -> AuthService:
    """Return the :class:`AuthService` bound to the current application."""
    service = current_app.extensions.get("auth_service")
    if service is None:
        raise RuntimeError("Auth service is not initialized. Call init_app() first.")
    return cast(AuthService, service)
