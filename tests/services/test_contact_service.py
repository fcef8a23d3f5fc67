# tests/services/test_contact_service.py
"""Tests for duplicate suppression and persistence of contact submissions."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from portfolio_backend.models import Contact
from portfolio_backend.services.contact_service import (
    ContactService,
    DuplicateSubmissionError,
    SanitizedContact,
)


class MutableClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock() -> MutableClock:
    return MutableClock(datetime(2026, 10, 17, 12, 0, tzinfo=UTC))


@pytest.fixture()
def service(clock: MutableClock) -> ContactService:
    return ContactService(duplicate_window=timedelta(hours=1), clock=clock)


def _contact(email: str = "jane@example.com") -> SanitizedContact:
    return SanitizedContact.from_raw("Jane", email, "Hello there, lovely portfolio!")


def _count(db: Session) -> int:
    return db.execute(select(func.count()).select_from(Contact)).scalar_one()


def test_sanitized_contact_from_raw() -> None:
    contact = SanitizedContact.from_raw("  <Jane>  ", " jane@example.com ", "<p>Hi</p>")
    assert contact == SanitizedContact(name="Jane", email="jane@example.com", message="pHi/p")


def test_create_submission_persists_row(db_session: Session, service: ContactService, clock: MutableClock) -> None:
    record = service.create_submission(db_session, _contact(), "1.2.3.4")

    assert record.id is not None
    assert record.ip_address == "1.2.3.4"
    assert record.created_at.replace(tzinfo=None) == clock.now.replace(tzinfo=None)
    assert _count(db_session) == 1


def test_duplicate_within_window_is_rejected(
    db_session: Session, service: ContactService, clock: MutableClock
) -> None:
    service.create_submission(db_session, _contact(), "1.2.3.4")
    clock.now += timedelta(minutes=59)

    assert service.find_recent_submission(db_session, "jane@example.com") is not None
    with pytest.raises(DuplicateSubmissionError) as exc_info:
        service.ensure_not_duplicate(db_session, "jane@example.com")
    assert exc_info.value.status_code == 429
    assert exc_info.value.reason == "duplicate"


def test_submission_after_window_is_accepted(
    db_session: Session, service: ContactService, clock: MutableClock
) -> None:
    service.create_submission(db_session, _contact(), "1.2.3.4")
    clock.now += timedelta(hours=1, seconds=1)

    assert service.find_recent_submission(db_session, "jane@example.com") is None
    service.ensure_not_duplicate(db_session, "jane@example.com")
    service.create_submission(db_session, _contact(), "1.2.3.4")
    assert _count(db_session) == 2


def test_other_emails_are_not_duplicates(db_session: Session, service: ContactService) -> None:
    service.create_submission(db_session, _contact("jane@example.com"), "1.2.3.4")
    service.ensure_not_duplicate(db_session, "john@example.com")
