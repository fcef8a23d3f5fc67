# src/portfolio_backend/api/endpoints/__init__.py
"""API endpoint modules."""

from .contact import router as contact_router
from .system import router as system_router

__all__ = [
    "contact_router",
    "system_router",
]
