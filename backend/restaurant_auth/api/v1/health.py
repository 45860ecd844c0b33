"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from restaurant_auth.api.deps import get_auth_service, json_response, timing
from restaurant_auth.services._shared.ports import RevocationStoreError, UserStoreError

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application, user store and denylist health information."""

    service = get_auth_service()

    store_status = "ok"
    try:
        service.users.find_by_id(0)
    except (UserStoreError, OSError):
        current_app.logger.exception("healthcheck.user_store_error")
        store_status = "fail"

    denylist_status = "ok"
    try:
        service.denylist.is_revoked("healthcheck")
    except RevocationStoreError:
        current_app.logger.exception("healthcheck.denylist_error")
        denylist_status = "fail"

    version = current_app.config.get("APP_VERSION", "dev")
    payload = {
        "status": "ok" if store_status == denylist_status == "ok" else "degraded",
        "user_store": store_status,
        "denylist": denylist_status,
        "version": version,
    }
    return json_response(payload)
