# src/portfolio_backend/services/validation.py
"""Contact form validation and sanitization."""

from __future__ import annotations

import re
from typing import Final

NAME_MIN_LENGTH: Final[int] = 2
NAME_MAX_LENGTH: Final[int] = 100
EMAIL_MIN_LENGTH: Final[int] = 5
EMAIL_MAX_LENGTH: Final[int] = 255
MESSAGE_MIN_LENGTH: Final[int] = 10
MESSAGE_MAX_LENGTH: Final[int] = 2000
SANITIZED_MAX_LENGTH: Final[int] = 2000

_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"[a-zA-Z\s'-]+")
_EMAIL_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_ANGLE_BRACKETS: Final[re.Pattern[str]] = re.compile(r"[<>]")


def _validate_name(name: str) -> str | None:
    if not name.strip():
        return "Name is required"
    if len(name) < NAME_MIN_LENGTH:
        return f"Name must be at least {NAME_MIN_LENGTH} characters"
    if len(name) > NAME_MAX_LENGTH:
        return f"Name must not exceed {NAME_MAX_LENGTH} characters"
    if not _NAME_PATTERN.fullmatch(name):
        return "Name contains invalid characters"
    return None


def _validate_email(email: str) -> str | None:
    if not email.strip():
        return "Email is required"
    if len(email) < EMAIL_MIN_LENGTH:
        return "Email is invalid"
    if len(email) > EMAIL_MAX_LENGTH:
        return f"Email must not exceed {EMAIL_MAX_LENGTH} characters"
    if not _EMAIL_PATTERN.fullmatch(email):
        return "Email format is invalid"
    return None


def _validate_message(message: str) -> str | None:
    if not message.strip():
        return "Message is required"
    if len(message) < MESSAGE_MIN_LENGTH:
        return f"Message must be at least {MESSAGE_MIN_LENGTH} characters"
    if len(message) > MESSAGE_MAX_LENGTH:
        return f"Message must not exceed {MESSAGE_MAX_LENGTH} characters"
    return None


def validate_contact(
    name: str | None,
    email: str | None,
    message: str | None,
) -> dict[str, str]:
    """Check every contact field and collect the failures.

    Each field is checked independently so the caller sees all problems in
    one response. Within a field only the first failing rule is reported.

    Args:
        name: Submitted name (``None`` is treated as empty)
        email: Submitted email address
        message: Submitted message body

    Returns:
        Mapping of field name to error message; empty when the input is valid
    """
    errors: dict[str, str] = {}
    checks = (
        ("name", name, _validate_name),
        ("email", email, _validate_email),
        ("message", message, _validate_message),
    )
    for field, value, check in checks:
        error = check(value or "")
        if error:
            errors[field] = error
    return errors


def sanitize_input(value: str | None, max_length: int = SANITIZED_MAX_LENGTH) -> str:
    """Strip markup delimiters, trim and truncate a submitted value.

    The result never contains ``<`` or ``>``, is at most ``max_length``
    characters long, and is stable under repeated application.
    """
    if not value:
        return ""
    cleaned = _ANGLE_BRACKETS.sub("", value).strip()
    # Truncation can expose trailing whitespace.
    return cleaned[:max_length].rstrip()
