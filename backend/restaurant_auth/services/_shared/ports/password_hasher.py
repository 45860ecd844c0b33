from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """
    Port for one-way, salted password hashing.

    Implementations MUST be non-deterministic (random salt per call) and MUST
    compare in constant time. ``verify`` never raises: malformed hashes simply
    do not match.
    """

    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, hashed: str) -> bool: ...

    @property
    def decoy_hash(self) -> str:
        """A valid hash of unguessable data, compared against when no user matches."""
        ...
