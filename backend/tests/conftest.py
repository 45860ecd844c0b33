"""Global pytest fixtures for the restaurant auth API.

Every test gets its own application bound to a throwaway ``db.json`` under
``tmp_path``, so registrations never leak between cases.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from datetime import timedelta
from pathlib import Path
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient

from restaurant_auth import create_app
from restaurant_auth.core.config import TestingConfig
from restaurant_auth.infra.crypto.bcrypt_password_hasher import BcryptPasswordHasher
from restaurant_auth.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec, TokenSettings
from restaurant_auth.services._shared.ports import (
    InMemoryDenylistStore,
    InMemoryUserStore,
    ManualClock,
)
from restaurant_auth.services.auth.service import AuthService
from tests.factories.account import RegisterPayloadFactory
from tests.helpers.config import make_config

TEST_SECRET = TestingConfig.JWT_SECRET_KEY


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    """Location of the JSON user store for the current test."""

    return tmp_path / "data" / "db.json"


@pytest.fixture()
def app(store_path: Path) -> Generator[Flask, None, None]:
    """Create a Flask application configured for tests."""

    application = create_app(make_config(store_path))
    with application.app_context():
        yield application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a Flask test client (keeps cookies between requests)."""

    return app.test_client()


@pytest.fixture()
def register_payload() -> dict[str, str]:
    """A valid ``/register`` body with camelCase keys."""

    return RegisterPayloadFactory()


@pytest.fixture()
def registered(client: FlaskClient, register_payload: dict[str, str]) -> dict[str, Any]:
    """Register ``register_payload`` through the API and return payload + id."""

    resp = client.post("/api/v1/auth/register", json=register_payload)
    assert resp.status_code == 201, resp.get_json()
    return {**register_payload, "id": resp.get_json()["id"]}


# ----------------------------- Service wiring ------------------------------ #


@pytest.fixture()
def clock() -> ManualClock:
    """Deterministic clock starting at 2024-01-01 12:00 UTC."""

    return ManualClock()


@pytest.fixture(scope="session")
def hasher() -> BcryptPasswordHasher:
    """Cheapest bcrypt cost; shared so the decoy hash is computed once."""

    return BcryptPasswordHasher(rounds=4)


@pytest.fixture()
def codec(clock: ManualClock) -> PyJWTTokenCodec:
    return PyJWTTokenCodec(TokenSettings(secret=TEST_SECRET, ttl=timedelta(hours=2)), clock=clock)


@pytest.fixture()
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture()
def denylist(clock: ManualClock) -> InMemoryDenylistStore:
    return InMemoryDenylistStore(clock=clock)


@pytest.fixture()
def service(
    user_store: InMemoryUserStore,
    hasher: BcryptPasswordHasher,
    codec: PyJWTTokenCodec,
    denylist: InMemoryDenylistStore,
    clock: ManualClock,
) -> AuthService:
    """Build an AuthService wired to in-memory doubles and a manual clock."""

    return AuthService(
        user_store=user_store,
        hasher=hasher,
        codec=codec,
        denylist=denylist,
        clock=clock,
    )


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01") as frozen:
    ...         frozen.tick(60)
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01 12:00:00")

    return _factory
