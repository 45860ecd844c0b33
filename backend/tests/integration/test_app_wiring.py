"""Application startup, health and infrastructure wiring."""

from __future__ import annotations

import fakeredis
import pytest
import redis

from restaurant_auth import create_app
from restaurant_auth.core import extensions
from restaurant_auth.core.config import ConfigurationError
from restaurant_auth.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from restaurant_auth.services._shared.ports import InMemoryDenylistStore, token_fingerprint
from tests.helpers.config import make_config
from tests.helpers.http import bearer, token_from_response


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_signing_secret_refuses_to_start(store_path, secret):
    with pytest.raises(ConfigurationError):
        create_app(make_config(store_path, JWT_SECRET_KEY=secret))


def test_in_memory_denylist_without_redis(app):
    service = extensions.get_auth_service()
    assert isinstance(service.denylist, InMemoryDenylistStore)


def test_health_reports_components(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.get_json() == {
        "status": "ok",
        "user_store": "ok",
        "denylist": "ok",
        "version": "dev",
    }


def test_health_degrades_on_corrupt_store(client, store_path):
    store_path.parent.mkdir(parents=True, exist_ok=True)
    store_path.write_text("{broken", encoding="utf-8")

    body = client.get("/api/v1/health").get_json()

    assert body["status"] == "degraded"
    assert body["user_store"] == "fail"


def test_corrupt_store_yields_generic_500(client, store_path, register_payload):
    store_path.parent.mkdir(parents=True, exist_ok=True)
    store_path.write_text("{broken", encoding="utf-8")

    resp = client.post("/api/v1/auth/register", json=register_payload)

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "Registration failed"
    assert "broken" not in resp.get_data(as_text=True)


@pytest.fixture()
def redis_app(monkeypatch, store_path):
    server = fakeredis.FakeRedis()
    monkeypatch.setattr(redis.Redis, "from_url", staticmethod(lambda url, **kw: server))
    application = create_app(make_config(store_path, REDIS_URL="redis://cache:6379/0"))
    yield application, server


def test_redis_url_selects_shared_denylist(redis_app, register_payload):
    application, server = redis_app
    client = application.test_client()
    client.post("/api/v1/auth/register", json=register_payload)
    token = token_from_response(
        client.post(
            "/api/v1/auth/login",
            json={"email": register_payload["email"], "password": register_payload["password"]},
        )
    )

    client.post("/api/v1/auth/logout")

    with application.app_context():
        assert isinstance(extensions.get_auth_service().denylist, RedisTokenDenylistStore)
    key = f"deny:token:{token_fingerprint(token)}"
    assert 0 < server.pttl(key) <= 7200 * 1000
    replay = application.test_client().get("/api/v1/auth/me", headers=bearer(token))
    assert replay.get_json()["code"] == "token_revoked"


def test_unreachable_redis_refuses_to_start(monkeypatch, store_path):
    class _Down:
        def ping(self):
            raise redis.exceptions.ConnectionError("refused")

    monkeypatch.setattr(redis.Redis, "from_url", staticmethod(lambda url, **kw: _Down()))

    with pytest.raises(ConfigurationError):
        create_app(make_config(store_path, REDIS_URL="redis://nowhere:6379/0"))


def test_login_is_rate_limited(store_path, register_payload):
    application = create_app(
        make_config(store_path, RATELIMIT_ENABLED=True, AUTH_LOGIN_RATE_LIMIT="2 per minute")
    )
    client = application.test_client()
    body = {"email": register_payload["email"], "password": "Wr0ng!Password"}

    statuses = [client.post("/api/v1/auth/login", json=body).status_code for _ in range(3)]

    assert statuses == [401, 401, 429]
