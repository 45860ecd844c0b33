"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    CredentialPublicSchema,
    LoginSchema,
    MessageSchema,
    RegisteredSchema,
    RegisterSchema,
)

__all__ = [
    "RegisterSchema",
    "LoginSchema",
    "RegisteredSchema",
    "CredentialPublicSchema",
    "MessageSchema",
]
