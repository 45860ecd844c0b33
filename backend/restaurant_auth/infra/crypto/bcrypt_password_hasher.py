# restaurant_auth/infra/crypto/bcrypt_password_hasher.py
from __future__ import annotations

import secrets

import bcrypt

from restaurant_auth.services._shared.ports import PasswordHasher

DEFAULT_ROUNDS = 10


class BcryptPasswordHasher(PasswordHasher):
    """
    Adapter for the ``bcrypt`` library.

    Each call to :meth:`hash` draws a fresh salt, so equal passwords never
    produce equal hashes. :meth:`verify` delegates to ``bcrypt.checkpw``,
    which compares in constant time.

    :param rounds: bcrypt cost factor (``4``..``31``).
    :type rounds: int
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be within 4..31, got {rounds}")
        self.rounds = rounds
        # Ready before the first login; never recomputed
        self._decoy_hash = self.hash(secrets.token_urlsafe(32))

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not isinstance(plaintext, str) or not isinstance(hashed, str) or not hashed:
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Malformed hash ("Invalid salt") or input over bcrypt's 72-byte limit.
            return False

    @property
    def decoy_hash(self) -> str:
        return self._decoy_hash
