from __future__ import annotations

import threading
from dataclasses import replace
from typing import Protocol

from restaurant_auth.services.auth.dto import Credential


class UserStoreError(Exception):
    """Raised by user store adapters when the backing storage fails."""


class DuplicateEmailError(UserStoreError):
    """Raised by ``insert`` when the email is already taken (write-time race)."""


class UserStore(Protocol):
    """
    Port for credential persistence.

    Emails passed to ``find_by_email`` are already normalized (lowercase).
    ``insert`` assigns the identifier and returns the stored record.
    """

    def find_by_email(self, email: str) -> Credential | None: ...
    def find_by_id(self, user_id: int) -> Credential | None: ...
    def insert(self, credential: Credential) -> Credential: ...


class InMemoryUserStore(UserStore):
    """Dict-backed store for unit tests and ephemeral runs."""

    def __init__(self) -> None:
        self._by_id: dict[int, Credential] = {}
        self._seq = 0
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Credential | None:
        with self._lock:
            for cred in self._by_id.values():
                if cred.email == email.lower():
                    return cred
            return None

    def find_by_id(self, user_id: int) -> Credential | None:
        with self._lock:
            return self._by_id.get(user_id)

    def insert(self, credential: Credential) -> Credential:
        with self._lock:
            if any(c.email == credential.email for c in self._by_id.values()):
                raise DuplicateEmailError(credential.email)
            self._seq += 1
            stored = replace(credential, id=self._seq)
            self._by_id[stored.id] = stored  # type: ignore[index]
            return stored

    def delete(self, user_id: int) -> bool:
        """Remove a record (test helper for "user deleted after login")."""
        with self._lock:
            return self._by_id.pop(user_id, None) is not None
