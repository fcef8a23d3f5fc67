# src/portfolio_backend/services/__init__.py
"""Business logic services for the portfolio backend."""

from .contact_service import ContactService
from .event_log import EventLogService
from .rate_limit import RateLimiter, RateLimitSweeper

__all__ = [
    "ContactService",
    "EventLogService",
    "RateLimiter",
    "RateLimitSweeper",
]
