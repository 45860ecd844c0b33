"""Token expiry driven by the wall clock (frozen with freezegun)."""

from __future__ import annotations

from tests.helpers.http import bearer, set_cookie_header, token_from_response

LOGIN = "/api/v1/auth/login"
ME = "/api/v1/auth/me"
LOGOUT = "/api/v1/auth/logout"


def test_token_expires_after_ttl_and_cookie_is_cleared(app, registered, freeze_time):
    with freeze_time("2024-01-01 12:00:00") as frozen:
        resp = app.test_client().post(
            LOGIN, json={"email": registered["email"], "password": registered["password"]}
        )
        token = token_from_response(resp)

        frozen.tick(7199)
        assert app.test_client().get(ME, headers=bearer(token)).status_code == 200

        frozen.tick(1)
        expired = app.test_client().get(ME, headers=bearer(token))

    assert expired.status_code == 401
    assert expired.get_json()["code"] == "token_expired"
    assert "expired" in expired.get_json()["error"]
    cleared = set_cookie_header(expired)
    assert cleared is not None and cleared.startswith("rm_auth=;")


def test_logout_of_expired_token_is_a_quiet_success(app, registered, freeze_time):
    with freeze_time("2024-01-01 12:00:00") as frozen:
        resp = app.test_client().post(
            LOGIN, json={"email": registered["email"], "password": registered["password"]}
        )
        token = token_from_response(resp)
        frozen.tick(7201)

        out = app.test_client().post(LOGOUT, headers=bearer(token))

    assert out.status_code == 200
