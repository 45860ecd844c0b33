from __future__ import annotations

import hashlib
import threading
from datetime import datetime, timedelta
from typing import Protocol

from restaurant_auth.services._shared.ports.clock import Clock, SystemClock


def token_fingerprint(token: str) -> str:
    """Return the SHA-256 hex digest used to key revocation entries."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class RevocationStoreError(Exception):
    """Raised by denylist adapters when the backing store is unreachable."""


class TokenDenylistStore(Protocol):
    """
    Abstraction for a revocation store for **access tokens**.

    ``revoke`` is idempotent. An entry MUST NOT outlive the token it protects:
    callers pass the token's remaining lifetime as ``ttl_remaining``.
    """

    def is_revoked(self, token: str) -> bool: ...
    def revoke(self, token: str, ttl_remaining: timedelta) -> None: ...
    def purge_expired(self) -> int: ...


class InMemoryDenylistStore(TokenDenylistStore):
    """
    Process-local denylist keyed by token fingerprint.

    Expiry is enforced lazily against the injected clock: stale entries are
    dropped when looked up and swept whenever a new entry is recorded.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._revoked)

    def is_revoked(self, token: str) -> bool:
        key = token_fingerprint(token)
        now = self._clock.now()
        with self._lock:
            expires_at = self._revoked.get(key)
            if expires_at is None:
                return False
            if expires_at <= now:
                del self._revoked[key]
                return False
            return True

    def revoke(self, token: str, ttl_remaining: timedelta) -> None:
        if ttl_remaining <= timedelta(0):
            # Already expired: the codec rejects it on its own.
            return
        key = token_fingerprint(token)
        now = self._clock.now()
        with self._lock:
            self._sweep(now)
            self._revoked.setdefault(key, now + ttl_remaining)

    def purge_expired(self) -> int:
        with self._lock:
            return self._sweep(self._clock.now())

    def _sweep(self, now: datetime) -> int:
        stale = [k for k, exp in self._revoked.items() if exp <= now]
        for k in stale:
            del self._revoked[k]
        return len(stale)
