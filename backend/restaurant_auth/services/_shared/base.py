# restaurant_auth/services/_shared/base.py
from __future__ import annotations

import logging

from restaurant_auth.core import errors as api_errors
from restaurant_auth.services._shared.errors import (
    AccountNotFoundError,
    AuthenticationError,
    ConflictError,
    InternalError,
    ServiceError,
    TokenError,
    ValidationError,
)
from restaurant_auth.services._shared.ports.token_codec import TokenFailure

# Stable machine-readable codes per token rejection reason
TOKEN_ERROR_CODES: dict[TokenFailure, str] = {
    TokenFailure.ABSENT: "not_authenticated",
    TokenFailure.REVOKED: "token_revoked",
    TokenFailure.EXPIRED: "token_expired",
    TokenFailure.INVALID: "invalid_token",
}


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hold a service logger named after the concrete service module.
    * Centralize translation of service errors into API errors.

    Notes
    -----
    Services never import Flask request state; the API layer passes plain
    values (DTOs, raw tokens) and translates the errors raised back.
    """

    def __init__(self) -> None:
        self.log = logging.getLogger(type(self).__module__)

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, ValidationError):
            # → 400 Bad Request, specific rule message
            return api_errors.BadRequest(str(exc))

        if isinstance(exc, ConflictError):
            # → 409 Conflict
            return api_errors.Conflict(str(exc))

        if isinstance(exc, AuthenticationError):
            # → 401, one message for every login failure
            return api_errors.Unauthorized(str(exc), code="invalid_credentials")

        if isinstance(exc, TokenError):
            # Expired credentials are also dropped client-side
            return api_errors.Unauthorized(
                str(exc),
                code=TOKEN_ERROR_CODES[exc.reason],
                clear_credentials=exc.reason is TokenFailure.EXPIRED,
            )

        if isinstance(exc, AccountNotFoundError):
            return api_errors.Unauthorized(str(exc), code="user_not_found")

        if isinstance(exc, InternalError):
            # → 500 with a generic, cause-free message
            return api_errors.InternalServerError(str(exc))

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
