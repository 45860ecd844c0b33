"""
restaurant_auth.services._shared.ports
======================================

Collection of *ports* (hexagonal interfaces) that define the contracts the
authentication core depends on.

Modules
-------
- :mod:`clock`:
    :class:`~.Clock` plus :class:`~.SystemClock` and the test-friendly
    :class:`~.ManualClock`.

- :mod:`password_hasher`:
    :class:`~.PasswordHasher`: salted one-way hashing with constant-time checks.

- :mod:`token_codec`:
    :class:`~.TokenCodec`, :class:`~.TokenClaims`, :class:`~.TokenVerification`
    and :class:`~.TokenFailure`: signing and verifying bearer tokens.

- :mod:`denylist_store`:
    :class:`~.TokenDenylistStore` and :class:`~.InMemoryDenylistStore`:
    revocation of not-yet-expired tokens.

- :mod:`user_store`:
    :class:`~.UserStore` and :class:`~.InMemoryUserStore`: credential persistence.

Design Notes
------------
Concrete adapters (bcrypt, PyJWT, Redis, JSON file) live under
``restaurant_auth.infra`` and are wired in :mod:`restaurant_auth.core.extensions`.
"""

from __future__ import annotations

from .clock import Clock, ManualClock, SystemClock
from .denylist_store import (
    InMemoryDenylistStore,
    RevocationStoreError,
    TokenDenylistStore,
    token_fingerprint,
)
from .password_hasher import PasswordHasher
from .token_codec import TokenClaims, TokenCodec, TokenFailure, TokenVerification
from .user_store import DuplicateEmailError, InMemoryUserStore, UserStore, UserStoreError

__all__ = [
    "Clock",
    "SystemClock",
    "ManualClock",
    "PasswordHasher",
    "TokenCodec",
    "TokenClaims",
    "TokenFailure",
    "TokenVerification",
    "TokenDenylistStore",
    "InMemoryDenylistStore",
    "token_fingerprint",
    "RevocationStoreError",
    "UserStore",
    "InMemoryUserStore",
    "UserStoreError",
    "DuplicateEmailError",
]
