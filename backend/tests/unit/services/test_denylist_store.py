# tests/unit/services/test_denylist_store.py
from __future__ import annotations

import threading
from datetime import timedelta

from restaurant_auth.services._shared.ports import InMemoryDenylistStore, token_fingerprint


def test_revoke_then_is_revoked(denylist):
    denylist.revoke("tok-1", timedelta(minutes=5))

    assert denylist.is_revoked("tok-1") is True
    assert denylist.is_revoked("tok-2") is False


def test_entries_are_keyed_by_fingerprint(denylist):
    denylist.revoke("secret-token", timedelta(minutes=5))

    assert "secret-token" not in denylist._revoked
    assert token_fingerprint("secret-token") in denylist._revoked


def test_entry_expires_with_the_clock(denylist, clock):
    denylist.revoke("tok", timedelta(seconds=30))

    clock.advance(timedelta(seconds=29))
    assert denylist.is_revoked("tok")

    clock.advance(timedelta(seconds=1))
    assert not denylist.is_revoked("tok")
    assert len(denylist) == 0


def test_non_positive_ttl_records_nothing(denylist):
    denylist.revoke("tok", timedelta(0))
    denylist.revoke("tok", timedelta(seconds=-5))

    assert len(denylist) == 0


def test_revoke_twice_keeps_first_expiry(denylist, clock):
    denylist.revoke("tok", timedelta(seconds=10))
    denylist.revoke("tok", timedelta(hours=1))

    clock.advance(timedelta(seconds=10))
    assert not denylist.is_revoked("tok")


def test_insert_sweeps_stale_entries(denylist, clock):
    for i in range(5):
        denylist.revoke(f"old-{i}", timedelta(seconds=1))
    clock.advance(timedelta(seconds=2))

    denylist.revoke("fresh", timedelta(minutes=1))

    assert len(denylist) == 1


def test_purge_expired_reports_count(denylist, clock):
    denylist.revoke("a", timedelta(seconds=1))
    denylist.revoke("b", timedelta(minutes=1))
    clock.advance(timedelta(seconds=5))

    assert denylist.purge_expired() == 1
    assert denylist.is_revoked("b")


def test_concurrent_revocations_are_all_recorded(clock):
    store = InMemoryDenylistStore(clock=clock)

    def worker(offset: int) -> None:
        for i in range(100):
            store.revoke(f"tok-{offset}-{i}", timedelta(minutes=1))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 800
