# restaurant_auth/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

# ------------------------------ Domain ------------------------------------ #


class Role(str, Enum):
    """Closed set of roles a restaurant account can hold."""

    OWNER = "owner"
    MANAGER = "manager"
    STAFF = "staff"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(r.value for r in cls)


@dataclass(frozen=True, slots=True)
class Credential:
    """
    Stored registration record.

    :param id: Store-assigned identifier (``None`` until inserted).
    :type id: int | None
    :param email: Login email, normalized to lowercase.
    :type email: str
    :param password_hash: One-way hash produced by the password hasher.
    :type password_hash: str
    :param first_name: Given name.
    :type first_name: str
    :param last_name: Family name.
    :type last_name: str
    :param restaurant_name: Organization the account belongs to.
    :type restaurant_name: str
    :param role: One of :class:`Role`.
    :type role: Role
    :param created_at: Creation instant (aware UTC).
    :type created_at: datetime
    :param phone: Optional phone number (``""`` when absent).
    :type phone: str
    """

    id: int | None
    email: str
    password_hash: str = field(repr=False)
    first_name: str
    last_name: str
    restaurant_name: str
    role: Role
    created_at: datetime
    phone: str = ""


# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration (raw, unsanitized values).

    :param email: Email as typed by the user.
    :param password: Raw password.
    :param first_name: Raw first name.
    :param last_name: Raw last name.
    :param restaurant_name: Raw restaurant name.
    :param role: Requested role (string, checked against :class:`Role`).
    :param phone: Optional phone (``""`` when not provided).
    """

    email: str
    password: str
    first_name: str
    last_name: str
    restaurant_name: str
    role: str
    phone: str = ""


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email (normalized by the service).
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class CredentialPublic:
    """Public-safe projection of a :class:`Credential` (never carries the hash)."""

    id: int
    email: str
    first_name: str
    last_name: str
    restaurant_name: str
    role: str
    created_at: datetime
    phone: str = ""

    @classmethod
    def from_credential(cls, cred: Credential) -> CredentialPublic:
        if cred.id is None:
            raise ValueError("Credential has not been persisted")
        return cls(
            id=cred.id,
            email=cred.email,
            first_name=cred.first_name,
            last_name=cred.last_name,
            restaurant_name=cred.restaurant_name,
            role=cred.role.value,
            created_at=cred.created_at,
            phone=cred.phone,
        )


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """
    Output DTO for a successful login.

    :param token: Encoded bearer token.
    :type token: str
    :param expires_at: Absolute expiry (aware UTC).
    :type expires_at: datetime
    :param max_age: Lifetime in whole seconds, for the transport's cookie.
    :type max_age: int
    """

    token: str
    expires_at: datetime
    max_age: int
