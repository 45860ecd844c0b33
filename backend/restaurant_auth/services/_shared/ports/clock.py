from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port for reading the current time (always timezone-aware UTC)."""

    def now(self) -> datetime: ...


class SystemClock(Clock):
    """Wall clock backed by :func:`datetime.now`."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class ManualClock(Clock):
    """
    Deterministic clock used in unit tests.

    :param start: Initial instant. Naive datetimes are interpreted as UTC.
    :type start: datetime | None
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._now = self._aware(start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC))
        self._lock = threading.Lock()

    @staticmethod
    def _aware(dt: datetime) -> datetime:
        return dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock forward by ``delta`` and return the new instant."""
        with self._lock:
            self._now = self._now + delta
            return self._now

    def set(self, instant: datetime) -> None:
        with self._lock:
            self._now = self._aware(instant)
