# restaurant_auth/infra/jwt/pyjwt_token_codec.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from restaurant_auth.core.config import ConfigurationError
from restaurant_auth.services._shared.ports import (
    Clock,
    SystemClock,
    TokenClaims,
    TokenCodec,
    TokenFailure,
    TokenVerification,
)

# PyJWT's own time checks read the wall clock; expiry is decided here instead.
_DECODE_OPTIONS: dict[str, Any] = {
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "require": ["sub", "email", "iat", "exp", "jti"],
}


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """
    Token emission configuration.

    :param secret: HMAC signing secret (required).
    :type secret: str | None
    :param ttl: Token lifetime.
    :type ttl: timedelta
    :param algorithm: Symmetric JWS algorithm.
    :type algorithm: str
    """

    secret: str | None
    ttl: timedelta = timedelta(hours=2)
    algorithm: str = "HS256"


class PyJWTTokenCodec(TokenCodec):
    """
    Signs and verifies HS256 JWTs with PyJWT.

    All timestamps come from the injected :class:`Clock`, so tests can pin
    the expiry boundary precisely.

    :raises ConfigurationError: If ``settings.secret`` is empty or missing.
    """

    def __init__(self, settings: TokenSettings, clock: Clock | None = None) -> None:
        if not settings.secret:
            raise ConfigurationError("JWT_SECRET_KEY is not configured; refusing to start.")
        if settings.ttl <= timedelta(0):
            raise ConfigurationError("Token TTL must be positive.")
        self._settings = settings
        self._clock = clock or SystemClock()

    @property
    def ttl(self) -> timedelta:
        return self._settings.ttl

    def issue(self, *, user_id: int, email: str) -> str:
        issued_at = int(self._clock.now().timestamp())
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + int(self._settings.ttl.total_seconds()),
            "jti": uuid4().hex,
        }
        return jwt.encode(payload, self._settings.secret, algorithm=self._settings.algorithm)

    def verify(self, token: str) -> TokenVerification:
        try:
            payload = jwt.decode(
                token,
                self._settings.secret,
                algorithms=[self._settings.algorithm],
                options=_DECODE_OPTIONS,
            )
            claims = TokenClaims(
                user_id=int(payload["sub"]),
                email=str(payload["email"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
                jti=str(payload["jti"]),
            )
        except (jwt.InvalidTokenError, TypeError, ValueError):
            return TokenVerification.rejected(TokenFailure.INVALID)

        if claims.expires_at <= self._clock.now():
            return TokenVerification.rejected(TokenFailure.EXPIRED)
        return TokenVerification.ok(claims)
