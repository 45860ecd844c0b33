from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from restaurant_auth.services._shared.ports import (
    RevocationStoreError,
    TokenDenylistStore,
    token_fingerprint,
)


class RedisTokenDenylistStore(TokenDenylistStore):
    """
    Denylist for **access tokens** shared across processes through Redis.

    Entries are plain markers whose Redis TTL equals the token's remaining
    lifetime (rounded down), so Redis reclaims them on its own.
    """

    def __init__(self, r: redis.Redis, *, prefix: str = "deny:token:"):
        self.r = r
        self.prefix = prefix

    def _k(self, token: str) -> str:
        return f"{self.prefix}{token_fingerprint(token)}"

    def is_revoked(self, token: str) -> bool:
        try:
            return cast(int, self.r.exists(self._k(token))) == 1
        except RedisError as exc:
            raise RevocationStoreError("Redis denylist lookup failed") from exc

    def revoke(self, token: str, ttl_remaining: timedelta) -> None:
        ttl_ms = int(ttl_remaining.total_seconds() * 1000)
        if ttl_ms <= 0:
            return
        try:
            # store a small marker with TTL; idempotent
            self.r.set(self._k(token), "1", px=ttl_ms)
        except RedisError as exc:
            raise RevocationStoreError("Redis denylist write failed") from exc

    def purge_expired(self) -> int:
        # Redis expires keys itself.
        return 0
