# src/portfolio_backend/services/contact_service.py
"""Contact submission policy and persistence."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final

from fastapi import status
from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio_backend.core.settings import settings
from portfolio_backend.db.time import utcnow
from portfolio_backend.models import Contact
from portfolio_backend.services.validation import sanitize_input

DEFAULT_DUPLICATE_WINDOW: Final[timedelta] = timedelta(hours=1)


class ContactPolicyError(Exception):
    """Base class for submissions rejected by the contact policy."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    reason: str = "rejected"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RateLimitError(ContactPolicyError):
    """Too many submissions from one client within the rate-limit window."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    reason = "rate_limited"

    def __init__(
        self,
        message: str = (
            "You have exceeded the maximum number of submissions. Please try again later."
        ),
    ) -> None:
        super().__init__(message)


class DuplicateSubmissionError(ContactPolicyError):
    """The same email already submitted a message within the duplicate window."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    reason = "duplicate"

    def __init__(
        self,
        message: str = (
            "You have already submitted a message recently. "
            "Please wait before submitting again."
        ),
    ) -> None:
        super().__init__(message)


class ContactValidationError(ContactPolicyError):
    """One or more fields failed validation."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    reason = "validation_failed"

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("Validation failed")
        self.errors = errors


@dataclass(frozen=True)
class SanitizedContact:
    """Contact fields after sanitization, ready to be stored."""

    name: str
    email: str
    message: str

    @classmethod
    def from_raw(cls, name: str | None, email: str | None, message: str | None) -> SanitizedContact:
        return cls(
            name=sanitize_input(name),
            email=sanitize_input(email),
            message=sanitize_input(message),
        )


class ContactService:
    """Duplicate suppression and storage of contact submissions.

    The duplicate check and the insert are separate statements, so two
    concurrent submissions for the same email can both be stored.
    """

    def __init__(
        self,
        duplicate_window: timedelta = DEFAULT_DUPLICATE_WINDOW,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.duplicate_window = duplicate_window
        self._clock = clock

    def find_recent_submission(self, db: Session, email: str) -> Contact | None:
        """Return a submission from ``email`` inside the duplicate window, if any."""
        cutoff = self._clock() - self.duplicate_window
        stmt = (
            select(Contact)
            .where(Contact.email == email, Contact.created_at > cutoff)
            .order_by(Contact.created_at.desc())
            .limit(1)
        )
        return db.execute(stmt).scalars().first()

    def ensure_not_duplicate(self, db: Session, email: str) -> None:
        """Raise DuplicateSubmissionError if ``email`` submitted recently."""
        if self.find_recent_submission(db, email) is not None:
            raise DuplicateSubmissionError()

    def create_submission(
        self,
        db: Session,
        contact: SanitizedContact,
        ip_address: str | None,
    ) -> Contact:
        """Persist a sanitized submission with a server-assigned timestamp."""
        record = Contact(
            name=contact.name,
            email=contact.email,
            message=contact.message,
            ip_address=ip_address,
            created_at=self._clock(),
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record


def get_contact_service() -> ContactService:
    """Return a contact service instance."""
    return ContactService(duplicate_window=timedelta(seconds=settings.duplicate_window_seconds))
