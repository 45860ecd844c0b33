"""Authentication-related Marshmallow schemas.

Input schemas only enforce *types*; the business rules (password strength,
name charset, role set) live in the service so that their messages reach the
client unchanged.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class RegisterSchema(Schema):
    """Input payload for account registration (camelCase on the wire)."""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default="")
    password = fields.String(load_default="")
    first_name = fields.String(data_key="firstName", load_default="")
    last_name = fields.String(data_key="lastName", load_default="")
    restaurant_name = fields.String(data_key="restaurantName", load_default="")
    role = fields.String(load_default="")
    phone = fields.String(load_default="")


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default="")
    password = fields.String(load_default="")


class RegisteredSchema(Schema):
    """Response body for a created account."""

    id = fields.Integer(required=True)
    email = fields.String(required=True)
    message = fields.String(dump_default="User created successfully")


class CredentialPublicSchema(Schema):
    """Profile of the authenticated account, as returned by ``/me``."""

    id = fields.Integer(required=True)
    first_name = fields.String(data_key="firstName")
    last_name = fields.String(data_key="lastName")
    email = fields.String(required=True)
    restaurant_name = fields.String(data_key="restaurantName")
    role = fields.String()
    created_at = fields.DateTime(data_key="createdAt", format="iso")


class MessageSchema(Schema):
    """Acknowledgement body (login, logout)."""

    ok = fields.Boolean(dump_default=True)
    message = fields.String(required=True)
