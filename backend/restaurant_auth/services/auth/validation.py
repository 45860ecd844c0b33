"""
Input validation and sanitization for the authentication flows.

Every validator is total: it never raises and always returns either
:class:`Ok` or :class:`Invalid` carrying the first rule that failed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from markupsafe import escape

from restaurant_auth.services.auth.dto import Role

EMAIL_MAX_LENGTH = 254
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_BYTES = 72  # bcrypt input limit
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PHONE_MIN_LENGTH = 7
PHONE_MAX_LENGTH = 20
RESTAURANT_NAME_MAX_LENGTH = 100
SANITIZED_MAX_LENGTH = 255

PASSWORD_SYMBOLS = frozenset("!@#$%^&*()_+-=[]{};':\"\\|,.<>/?`~")

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@.]+(?:\.[^\s@.]+)+")
_PHONE_RE = re.compile(r"[0-9 +\-()]+")
_NAME_EXTRA_CHARS = frozenset(" -'")

_TAG_RE = re.compile(r"<[^>]*>")
_TEMPLATE_RE = re.compile(r"\$\{[^}]*\}")
_DOLLAR_IDENT_RE = re.compile(r"\$[A-Za-z_][A-Za-z0-9_]*")


# --------------------------------------------------------------------------- #
# Result type
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class Ok:
    """Successful validation."""

    valid: ClassVar[bool] = True
    reason: ClassVar[None] = None


@dataclass(frozen=True, slots=True)
class Invalid:
    """
    Failed validation.

    :param reason: Client-safe message describing the violated rule.
    :type reason: str
    """

    reason: str
    valid: ClassVar[bool] = False


ValidationResult = Ok | Invalid

OK = Ok()


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


# --------------------------------------------------------------------------- #
# Validators
# --------------------------------------------------------------------------- #


def validate_email(value: Any) -> ValidationResult:
    """Check the ``local@domain.tld`` shape (no DNS/MX lookups)."""
    s = _as_text(value)
    if not s or len(s) > EMAIL_MAX_LENGTH or not _EMAIL_RE.fullmatch(s):
        return Invalid("A valid email address is required")
    return OK


def validate_password(value: Any) -> ValidationResult:
    """
    Check password strength, reporting only the first failing rule.

    Priority: length, uppercase, lowercase, digit, symbol.
    """
    s = _as_text(value)
    if len(s) < PASSWORD_MIN_LENGTH:
        return Invalid(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(s.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return Invalid(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")
    if not any("A" <= ch <= "Z" for ch in s):
        return Invalid("Password must contain at least one uppercase letter")
    if not any("a" <= ch <= "z" for ch in s):
        return Invalid("Password must contain at least one lowercase letter")
    if not any("0" <= ch <= "9" for ch in s):
        return Invalid("Password must contain at least one number")
    if not any(ch in PASSWORD_SYMBOLS for ch in s):
        return Invalid("Password must contain at least one special character")
    return OK


def validate_name(value: Any, *, label: str = "Name") -> ValidationResult:
    """Allow 2-50 letters, spaces, hyphens and apostrophes."""
    s = _as_text(value)
    if not NAME_MIN_LENGTH <= len(s) <= NAME_MAX_LENGTH:
        return Invalid(
            f"{label} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    if not all(ch.isalpha() or ch in _NAME_EXTRA_CHARS for ch in s):
        return Invalid(f"{label} may only contain letters, spaces, hyphens and apostrophes")
    return OK


def validate_phone(value: Any) -> ValidationResult:
    """Phone is optional: ``""`` passes, anything else must look like a number."""
    s = _as_text(value)
    if s == "":
        return OK
    if not PHONE_MIN_LENGTH <= len(s) <= PHONE_MAX_LENGTH or not _PHONE_RE.fullmatch(s):
        return Invalid("Phone number must be 7-20 characters of digits, spaces, +, -, ( or )")
    return OK


def validate_role(value: Any) -> ValidationResult:
    if _as_text(value) not in Role.values():
        return Invalid(f"Invalid role: must be one of {', '.join(Role.values())}")
    return OK


def validate_restaurant_name(value: Any) -> ValidationResult:
    """
    Check the raw name as typed.

    Markup-only input is treated as missing; the length limit counts the
    trimmed input, not its HTML-encoded form.
    """
    s = _as_text(value).strip()
    if not sanitize_string(s):
        return Invalid("Restaurant name is required")
    if len(s) > RESTAURANT_NAME_MAX_LENGTH:
        return Invalid(
            f"Restaurant name must be at most {RESTAURANT_NAME_MAX_LENGTH} characters"
        )
    return OK


# --------------------------------------------------------------------------- #
# Sanitization
# --------------------------------------------------------------------------- #


def sanitize_string(value: Any) -> str:
    """
    Neutralize free text before persistence.

    Non-strings become ``""``; the rest is trimmed, truncated to 255 chars,
    stripped of tag-like substrings, HTML-encoded and stripped of template
    fragments (``${...}`` and ``$identifier``).
    """
    s = _as_text(value).strip()[:SANITIZED_MAX_LENGTH]
    s = _TAG_RE.sub("", s)
    s = str(escape(s))
    s = _TEMPLATE_RE.sub("", s)
    s = _DOLLAR_IDENT_RE.sub("", s)
    return s.strip()


def normalize_email(value: Any) -> str:
    return _as_text(value).strip().lower()
