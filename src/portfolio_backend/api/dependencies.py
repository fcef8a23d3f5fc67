"""Shared API dependencies for request context and application services."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from portfolio_backend.db.session import get_db
from portfolio_backend.services.contact_service import ContactService, get_contact_service
from portfolio_backend.services.event_log import EventLogService
from portfolio_backend.services.rate_limit import RateLimiter

UNKNOWN_CLIENT = "unknown"


def resolve_client_ip(request: Request) -> str:
    """Return the client IP, preferring the first ``X-Forwarded-For`` hop.

    Args:
        request: Incoming request

    Returns:
        Client IP address, or ``"unknown"`` when none is available
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def get_event_log(request: Request) -> EventLogService:
    """Return the audit log service opened at startup."""
    return request.app.state.event_log


def get_rate_limiter(request: Request) -> RateLimiter:
    """Return the process-wide contact form rate limiter."""
    return request.app.state.rate_limiter


def get_contact_service_dep() -> ContactService:
    """Get ContactService dependency for dependency injection."""
    return get_contact_service()


SessionDep = Annotated[Session, Depends(get_db)]
ClientIpDep = Annotated[str, Depends(resolve_client_ip)]
EventLogDep = Annotated[EventLogService, Depends(get_event_log)]
RateLimiterDep = Annotated[RateLimiter, Depends(get_rate_limiter)]
ContactServiceDep = Annotated[ContactService, Depends(get_contact_service_dep)]
