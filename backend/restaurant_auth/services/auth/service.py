# restaurant_auth/services/auth/service.py
from __future__ import annotations

from collections.abc import Iterable, Iterator

from restaurant_auth.services._shared.base import BaseService
from restaurant_auth.services._shared.errors import (
    AccountNotFoundError,
    AuthenticationError,
    ConflictError,
    InternalError,
    TokenError,
    ValidationError,
)
from restaurant_auth.services._shared.ports import (
    Clock,
    DuplicateEmailError,
    PasswordHasher,
    RevocationStoreError,
    SystemClock,
    TokenCodec,
    TokenDenylistStore,
    TokenFailure,
    UserStore,
    UserStoreError,
)
from restaurant_auth.services.auth.dto import (
    Credential,
    CredentialPublic,
    IssuedToken,
    LoginIn,
    RegisterIn,
    Role,
)
from restaurant_auth.services.auth.validation import (
    Invalid,
    ValidationResult,
    normalize_email,
    sanitize_string,
    validate_email,
    validate_name,
    validate_password,
    validate_phone,
    validate_restaurant_name,
    validate_role,
)

# Infrastructure failures that must never leak to callers
_STORE_FAILURES: tuple[type[Exception], ...] = (UserStoreError, OSError)


class AuthService(BaseService):
    """
    Account lifecycle service (register / login / authenticate / logout).

    Credentials are persisted through a :class:`UserStore`, passwords go
    through a :class:`PasswordHasher`, bearer tokens through a
    :class:`TokenCodec`, and logouts are recorded in a
    :class:`TokenDenylistStore` until the token would have expired anyway.
    """

    def __init__(
        self,
        *,
        user_store: UserStore,
        hasher: PasswordHasher,
        codec: TokenCodec,
        denylist: TokenDenylistStore,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param user_store: Credential persistence.
        :param hasher: Salted one-way password hasher.
        :param codec: Signs and verifies bearer tokens.
        :param denylist: Revocation store for logged-out tokens.
        :param clock: Time source; must be the one the codec uses.
        """
        super().__init__()
        self.users = user_store
        self.hasher = hasher
        self.codec = codec
        self.denylist = denylist
        self.clock = clock or SystemClock()

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> CredentialPublic:
        """
        Create an account from raw client input.

        :param dto: Registration input.
        :returns: Public projection of the stored credential.
        :raises ValidationError: On the first rule violated.
        :raises ConflictError: If the email is already registered.
        :raises InternalError: If hashing or storage fails.
        """
        email = normalize_email(dto.email)
        self._ensure_valid(self._registration_checks(dto, email))

        try:
            if self.users.find_by_email(email) is not None:
                raise ConflictError()
        except _STORE_FAILURES as exc:
            self.log.error(
                "auth.register.store_failed", extra={"event": "register"}, exc_info=exc
            )
            raise InternalError("Registration failed") from exc

        try:
            password_hash = self.hasher.hash(dto.password)
        except (ValueError, TypeError) as exc:
            self.log.error(
                "auth.register.hash_failed", extra={"event": "register"}, exc_info=exc
            )
            raise InternalError("Registration failed") from exc

        credential = Credential(
            id=None,
            email=email,
            password_hash=password_hash,
            first_name=sanitize_string(dto.first_name),
            last_name=sanitize_string(dto.last_name),
            restaurant_name=sanitize_string(dto.restaurant_name),
            role=Role(dto.role.strip()),
            created_at=self.clock.now(),
            phone=sanitize_string(dto.phone),
        )

        try:
            stored = self.users.insert(credential)
        except DuplicateEmailError as exc:
            # Lost a race against a concurrent registration
            raise ConflictError() from exc
        except _STORE_FAILURES as exc:
            self.log.error(
                "auth.register.store_failed", extra={"event": "register"}, exc_info=exc
            )
            raise InternalError("Registration failed") from exc

        self.log.info("auth.register.ok", extra={"event": "register", "user_id": stored.id})
        return self._public(stored, "Registration failed")

    @staticmethod
    def _registration_checks(dto: RegisterIn, email: str) -> Iterator[ValidationResult]:
        # Lazy so that later rules are not evaluated once one fails
        yield validate_email(email)
        yield validate_password(dto.password)
        yield validate_name(dto.first_name.strip(), label="First name")
        yield validate_name(dto.last_name.strip(), label="Last name")
        yield validate_phone(dto.phone)
        yield validate_role(dto.role.strip())
        yield validate_restaurant_name(dto.restaurant_name)

    @staticmethod
    def _ensure_valid(results: Iterable[ValidationResult]) -> None:
        for result in results:
            if isinstance(result, Invalid):
                raise ValidationError(result.reason)

    def _public(self, credential: Credential, failure: str) -> CredentialPublic:
        try:
            return CredentialPublic.from_credential(credential)
        except ValueError as exc:
            self.log.error("auth.credential.unpersisted", exc_info=exc)
            raise InternalError(failure) from exc

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> IssuedToken:
        """
        Verify credentials and issue a bearer token.

        The password comparison runs even when the account does not exist
        (against a decoy hash), and both failure causes raise the same
        :class:`AuthenticationError`.

        :param dto: Login input.
        :returns: Token plus its expiry and cookie lifetime.
        :raises ValidationError: If the email is malformed or no password is given.
        :raises AuthenticationError: If the credentials do not match.
        :raises InternalError: If the user store fails or the issued token cannot be read back.
        """
        email = normalize_email(dto.email)
        self._ensure_valid([validate_email(email)])
        if not dto.password:
            raise ValidationError("Password is required")

        try:
            credential = self.users.find_by_email(email)
        except _STORE_FAILURES as exc:
            self.log.error("auth.login.store_failed", extra={"event": "login"}, exc_info=exc)
            raise InternalError("Login failed") from exc

        stored_hash = credential.password_hash if credential else self.hasher.decoy_hash
        matched = self.hasher.verify(dto.password, stored_hash)
        if credential is None or not matched:
            self.log.warning(
                "auth.login.failed", extra={"event": "login", "reason": "invalid_credentials"}
            )
            raise AuthenticationError()

        if credential.id is None:
            self.log.error("auth.login.unpersisted", extra={"event": "login"})
            raise InternalError("Login failed")
        token = self.codec.issue(user_id=credential.id, email=credential.email)
        # Cookie expiry must agree with the signed exp, which is whole seconds
        issued = self.codec.verify(token)
        if issued.claims is None:
            self.log.error("auth.login.issue_failed", extra={"event": "login"})
            raise InternalError("Login failed")

        self.log.info("auth.login.ok", extra={"event": "login", "user_id": credential.id})
        return IssuedToken(
            token=token,
            expires_at=issued.claims.expires_at,
            max_age=int(self.codec.ttl.total_seconds()),
        )

    # ------------------------------------------------------------------ #
    # Authenticate (protected calls)
    # ------------------------------------------------------------------ #

    def authenticate(self, token: str | None) -> CredentialPublic:
        """
        Resolve a bearer token into the account it was issued for.

        Checks run in order: presence, revocation, signature and expiry,
        then account lookup.

        :param token: Raw token from the transport (``None`` when absent).
        :returns: Public projection of the account.
        :raises TokenError: If the token is absent, revoked, expired or invalid.
        :raises AccountNotFoundError: If the account no longer exists.
        :raises InternalError: If a backing store fails.
        """
        if not token:
            raise TokenError(TokenFailure.ABSENT)

        try:
            revoked = self.denylist.is_revoked(token)
        except RevocationStoreError as exc:
            self.log.error(
                "auth.authenticate.denylist_failed",
                extra={"event": "authenticate"},
                exc_info=exc,
            )
            raise InternalError("Authentication failed") from exc
        if revoked:
            raise TokenError(TokenFailure.REVOKED)

        verification = self.codec.verify(token)
        if not verification.valid or verification.claims is None:
            reason = verification.reason or TokenFailure.INVALID
            self.log.info(
                "auth.authenticate.rejected",
                extra={"event": "authenticate", "reason": reason.value},
            )
            raise TokenError(reason)

        try:
            credential = self.users.find_by_id(verification.claims.user_id)
        except _STORE_FAILURES as exc:
            self.log.error(
                "auth.authenticate.store_failed",
                extra={"event": "authenticate"},
                exc_info=exc,
            )
            raise InternalError("Authentication failed") from exc
        if credential is None:
            raise AccountNotFoundError()

        return self._public(credential, "Authentication failed")

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, token: str | None) -> None:
        """
        Revoke a token for the rest of its lifetime.

        Absent, invalid and expired tokens are accepted silently; only a
        revocation store outage is reported.

        :param token: Raw token from the transport (``None`` when absent).
        :raises InternalError: If the revocation store fails.
        """
        if not token:
            return

        verification = self.codec.verify(token)
        if not verification.valid or verification.claims is None:
            return

        remaining = verification.claims.expires_at - self.clock.now()
        try:
            self.denylist.revoke(token, remaining)
        except RevocationStoreError as exc:
            self.log.error("auth.logout.denylist_failed", extra={"event": "logout"}, exc_info=exc)
            raise InternalError("Logout failed") from exc

        self.log.info(
            "auth.logout.revoked", extra={"event": "logout", "user_id": verification.claims.user_id}
        )
