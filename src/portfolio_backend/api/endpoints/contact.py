# src/portfolio_backend/api/endpoints/contact.py
"""Contact form endpoint for the portfolio API."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import ValidationError

from portfolio_backend.api.dependencies import (
    ClientIpDep,
    ContactServiceDep,
    EventLogDep,
    RateLimiterDep,
    SessionDep,
)
from portfolio_backend.schemas.contact import ContactRequest, ContactResponse
from portfolio_backend.services.contact_service import (
    ContactPolicyError,
    ContactValidationError,
    DuplicateSubmissionError,
    RateLimitError,
    SanitizedContact,
)
from portfolio_backend.services.spam import is_spam
from portfolio_backend.services.validation import validate_contact

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contact", tags=["contact"])

SUCCESS_MESSAGE = "Your message has been received. Thank you!"
INVALID_BODY_MESSAGE = "Request body must be a JSON object with string fields."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."
HONEYPOT_FIELD = "honey_pot_field"


def _policy_exception(error: ContactPolicyError) -> HTTPException:
    """Translate a contact policy rejection into an HTTP error."""
    detail: dict[str, Any]
    if isinstance(error, ContactValidationError):
        detail = {"errors": error.errors}
    else:
        detail = {"success": False, "message": error.message}
    return HTTPException(status_code=error.status_code, detail=detail)


def _invalid_body() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"success": False, "message": INVALID_BODY_MESSAGE},
    )


async def _read_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as exc:
        raise _invalid_body() from exc
    if not isinstance(body, dict):
        raise _invalid_body()
    return body


def _parse_payload(body: dict[str, Any]) -> ContactRequest:
    try:
        return ContactRequest.model_validate(body)
    except ValidationError as exc:
        raise _invalid_body() from exc


def _honeypot_filled(body: dict[str, Any]) -> bool:
    """Return True if the hidden field carries any non-empty value, whatever its type."""
    return body.get(HONEYPOT_FIELD) not in (None, False, 0, "")


@router.post("", response_model=ContactResponse, response_model_exclude_none=True)
async def submit_contact(
    request: Request,
    client_ip: ClientIpDep,
    db: SessionDep,
    event_log: EventLogDep,
    rate_limiter: RateLimiterDep,
    contact_service: ContactServiceDep,
) -> ContactResponse:
    """Accept a contact form submission.

    Honeypot and spam hits are answered with success but never stored, so
    automated senders get no signal that they were detected.

    Args:
        request: Incoming request carrying the JSON form payload
        client_ip: Resolved client IP used for throttling and audit logs
        db: Database session
        event_log: Audit log writer
        rate_limiter: Per-IP fixed-window limiter
        contact_service: Duplicate check and persistence

    Returns:
        Success response; rejections are raised as HTTP errors
    """
    ip = client_ip
    try:
        if not rate_limiter.check(ip):
            event_log.log_security_event(ip, "rate_limit", "Max submissions exceeded")
            event_log.log_contact_attempt(
                ip, False, reason=RateLimitError.reason, rate_limited=True
            )
            raise _policy_exception(RateLimitError())

        try:
            body = await _read_body(request)
        except HTTPException:
            event_log.log_contact_attempt(ip, False, reason="invalid_body")
            raise

        # Checked on the raw body so a filled honeypot never sees a parse error.
        if _honeypot_filled(body):
            event_log.log_security_event(ip, "honeypot_triggered", "Bot detected")
            event_log.log_contact_attempt(ip, False, reason="honeypot")
            return ContactResponse(success=True)

        try:
            payload = _parse_payload(body)
        except HTTPException:
            event_log.log_contact_attempt(ip, False, reason="invalid_body")
            raise

        errors = validate_contact(payload.name, payload.email, payload.message)
        if errors:
            event_log.log_contact_attempt(
                ip, False, reason=ContactValidationError.reason, email=payload.email
            )
            raise _policy_exception(ContactValidationError(errors))

        if is_spam(payload.message, payload.email):
            event_log.log_security_event(ip, "spam_detected", "Spam keywords or excessive URLs")
            event_log.log_contact_attempt(ip, False, reason="spam", email=payload.email, spam=True)
            logger.warning("Spam detected from IP: %s", ip)
            return ContactResponse(success=True)

        contact = SanitizedContact.from_raw(payload.name, payload.email, payload.message)

        try:
            contact_service.ensure_not_duplicate(db, contact.email)
        except DuplicateSubmissionError as exc:
            event_log.log_contact_attempt(
                ip, False, reason=exc.reason, email=contact.email, duplicate=True
            )
            raise _policy_exception(exc) from exc

        contact_service.create_submission(db, contact, ip)
        event_log.log_contact_attempt(ip, True, email=contact.email)
        return ContactResponse(success=True, message=SUCCESS_MESSAGE)

    except HTTPException as exc:
        logger.info("Contact form rejected for %s with status %s", ip, exc.status_code)
        raise
    except Exception as exc:
        logger.error("Contact form error for %s: %s", ip, exc, exc_info=True)
        event_log.log_error(exc, {"route": "/api/contact", "ip": ip})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"success": False, "message": UNEXPECTED_ERROR_MESSAGE},
        ) from exc
