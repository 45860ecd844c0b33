from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Protocol


class TokenFailure(str, Enum):
    """Why a bearer credential was rejected."""

    ABSENT = "not_authenticated"
    REVOKED = "revoked"
    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Decoded view of a verified token.

    :ivar user_id: Subject identifier.
    :ivar email: Subject email at issuance.
    :ivar issued_at: ``iat`` as aware UTC datetime.
    :ivar expires_at: ``exp`` as aware UTC datetime.
    :ivar jti: Unique token identifier.
    """

    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime
    jti: str


@dataclass(frozen=True, slots=True)
class TokenVerification:
    """Outcome of :meth:`TokenCodec.verify`: either ``claims`` or a ``reason``."""

    valid: bool
    claims: TokenClaims | None = None
    reason: TokenFailure | None = None

    @classmethod
    def ok(cls, claims: TokenClaims) -> TokenVerification:
        return cls(valid=True, claims=claims)

    @classmethod
    def rejected(cls, reason: TokenFailure) -> TokenVerification:
        return cls(valid=False, reason=reason)


class TokenCodec(Protocol):
    """Port for signing and verifying time-bound bearer tokens."""

    @property
    def ttl(self) -> timedelta: ...

    def issue(self, *, user_id: int, email: str) -> str: ...

    def verify(self, token: str) -> TokenVerification: ...
