"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app, request
from flask_jwt_extended import set_access_cookies, unset_jwt_cookies

from restaurant_auth.api.deps import (
    extract_token,
    get_auth_service,
    json_response,
    service_errors,
    timing,
)
from restaurant_auth.core.extensions import limiter
from restaurant_auth.schemas import (
    CredentialPublicSchema,
    LoginSchema,
    MessageSchema,
    RegisteredSchema,
    RegisterSchema,
)
from restaurant_auth.services.auth.dto import LoginIn, RegisterIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
registered_schema = RegisteredSchema()
profile_schema = CredentialPublicSchema()
message_schema = MessageSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
@service_errors
def register():
    """Register a new account and return its id."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    account = get_auth_service().register(RegisterIn(**payload))
    return json_response(registered_schema.dump(account), status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
@service_errors
def login():
    """Authenticate credentials and set the auth cookie."""

    data = login_schema.load(request.get_json(silent=True) or {})
    issued = get_auth_service().login(LoginIn(**data))
    response = json_response(message_schema.dump({"message": "Login successful"}))
    set_access_cookies(response, issued.token, max_age=issued.max_age)
    return response


@bp.get("/me")
@timing
@service_errors
def me():
    """Return the profile of the account the token belongs to."""

    account = get_auth_service().authenticate(extract_token())
    return json_response(profile_schema.dump(account))


@bp.post("/logout")
@timing
@service_errors
def logout():
    """Revoke the current token (if any) and clear the auth cookie."""

    get_auth_service().logout(extract_token())
    response = json_response(message_schema.dump({"message": "Logged out"}))
    unset_jwt_cookies(response)
    return response
