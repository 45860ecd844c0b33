"""Service layer public API.

This package exposes the essential building blocks for the service layer so
that callers can import from :mod:`restaurant_auth.services` without knowing
internal structure.

Re-exports
----------
- Base primitives (from ``restaurant_auth.services._shared.base``)
    * :class:`BaseService`

- Auth service (from ``restaurant_auth.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`RegisterIn`, :class:`LoginIn`, :class:`CredentialPublic`,
      :class:`IssuedToken`
"""

from __future__ import annotations

# Base primitives
from ._shared.base import BaseService

# Auth
from .auth.dto import CredentialPublic, IssuedToken, LoginIn, RegisterIn
from .auth.service import AuthService

__all__ = [
    "BaseService",
    "AuthService",
    "RegisterIn",
    "LoginIn",
    "CredentialPublic",
    "IssuedToken",
]
