"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between the
authentication core and its callers.

The translation to HTTP responses (RFC 7807) is handled by
``restaurant_auth/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from restaurant_auth.services._shared.ports.token_codec import TokenFailure

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``str(exc)`` is always safe to show to clients.
    - The API layer translates them to ``APIError`` subclasses.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class ValidationError(ServiceError):
    """
    Raised when client input is malformed or too weak.

    :param reason: Message of the first rule violated.
    :type reason: str
    """

    reason: str

    def __str__(self) -> str:
        return self.reason


class ConflictError(ServiceError):
    """Raised when registering an email that is already taken."""

    def __init__(self, message: str = "User already exists") -> None:
        super().__init__(message)


class AuthenticationError(ServiceError):
    """
    Raised on any login failure.

    The message is identical whether the account is missing or the password
    is wrong, so callers cannot enumerate registered emails.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


_TOKEN_MESSAGES: dict[TokenFailure, str] = {
    TokenFailure.ABSENT: "Not authenticated",
    TokenFailure.REVOKED: "Token has been revoked",
    TokenFailure.EXPIRED: "Token has expired",
    TokenFailure.INVALID: "Invalid token",
}


@dataclass(slots=True)
class TokenError(ServiceError):
    """
    Raised when a bearer credential is rejected on a protected call.

    :param reason: Which check rejected the token.
    :type reason: TokenFailure
    """

    reason: TokenFailure

    def __str__(self) -> str:
        return _TOKEN_MESSAGES[self.reason]


class AccountNotFoundError(ServiceError):
    """Raised when a valid token refers to a user that no longer exists."""

    def __init__(self) -> None:
        super().__init__("User not found")


@dataclass(slots=True)
class InternalError(ServiceError):
    """
    Raised when storage or hashing fails.

    :param operation: Generic, client-safe description (e.g. "Registration failed").
    :type operation: str
    """

    operation: str

    def __str__(self) -> str:
        return self.operation
