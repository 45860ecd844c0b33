"""
User storage backed by a single JSON document.

The file layout matches the original ``db.json``::

    {"users": [{"id": 1, "email": "...", "passwordHash": "...", ...}]}
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

from restaurant_auth.services._shared.ports import (
    DuplicateEmailError,
    UserStore,
    UserStoreError,
)
from restaurant_auth.services.auth.dto import Credential, Role

log = logging.getLogger(__name__)


def _to_record(cred: Credential) -> dict[str, Any]:
    return {
        "id": cred.id,
        "firstName": cred.first_name,
        "lastName": cred.last_name,
        "email": cred.email,
        "passwordHash": cred.password_hash,
        "restaurantName": cred.restaurant_name,
        "role": cred.role.value,
        "phone": cred.phone,
        "createdAt": cred.created_at.isoformat(),
    }


def _from_record(rec: dict[str, Any]) -> Credential:
    return Credential(
        id=int(rec["id"]),
        email=str(rec["email"]).lower(),
        password_hash=str(rec["passwordHash"]),
        first_name=rec.get("firstName") or "",
        last_name=rec.get("lastName") or "",
        restaurant_name=rec.get("restaurantName") or "",
        role=Role(rec.get("role") or Role.STAFF.value),
        created_at=datetime.fromisoformat(rec["createdAt"]),
        phone=rec.get("phone") or "",
    )


class JsonFileUserStore(UserStore):
    """
    Thread-safe JSON file store.

    The document is re-read on every call so that edits made by another
    process are picked up; writes go to a temporary file that atomically
    replaces the original.

    :param path: Location of the JSON document. Parent directories are
        created on first write.
    :type path: str | Path
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ #
    # UserStore
    # ------------------------------------------------------------------ #

    def find_by_email(self, email: str) -> Credential | None:
        needle = email.lower()
        with self._lock:
            for rec in self._load()["users"]:
                if str(rec.get("email", "")).lower() == needle:
                    return self._decode(rec)
        return None

    def find_by_id(self, user_id: int) -> Credential | None:
        with self._lock:
            for rec in self._load()["users"]:
                if int(rec["id"]) == user_id:
                    return self._decode(rec)
        return None

    def insert(self, credential: Credential) -> Credential:
        with self._lock:
            doc = self._load()
            users: list[dict[str, Any]] = doc["users"]
            if any(str(u.get("email", "")).lower() == credential.email for u in users):
                raise DuplicateEmailError(credential.email)
            next_id = max((int(u["id"]) for u in users), default=0) + 1
            stored = replace(credential, id=next_id)
            users.append(_to_record(stored))
            self._save(doc)
        log.info("user_store.insert", extra={"user_id": stored.id})
        return stored

    # ------------------------------------------------------------------ #
    # File I/O
    # ------------------------------------------------------------------ #

    def _decode(self, rec: dict[str, Any]) -> Credential:
        try:
            return _from_record(rec)
        except (KeyError, TypeError, ValueError) as exc:
            raise UserStoreError(f"Malformed user record in {self.path}") from exc

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"users": []}
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = f.read()
        except OSError as exc:
            raise UserStoreError(f"Cannot read {self.path}") from exc
        if not raw.strip():
            return {"users": []}
        try:
            doc = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise UserStoreError(f"Corrupt user store {self.path}") from exc
        if not isinstance(doc, dict) or not isinstance(doc.get("users", []), list):
            raise UserStoreError(f"Unexpected layout in {self.path}")
        users = doc.setdefault("users", [])
        for rec in users:
            if not isinstance(rec, dict):
                raise UserStoreError(f"Unexpected user entry in {self.path}")
            try:
                int(rec["id"])
            except (KeyError, TypeError, ValueError) as exc:
                raise UserStoreError(f"User entry without a valid id in {self.path}") from exc
        return doc

    def _save(self, doc: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w", dir=self.path.parent, delete=False, encoding="utf-8", suffix=".tmp"
            ) as tf:
                json.dump(doc, tf, indent=2, ensure_ascii=False)
                temp_path = Path(tf.name)
            os.replace(temp_path, self.path)
        except OSError as exc:
            raise UserStoreError(f"Cannot write {self.path}") from exc
