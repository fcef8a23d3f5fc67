# src/portfolio_backend/models/__init__.py
"""SQLAlchemy models for the portfolio backend."""

from .contact import Contact

__all__ = ["Contact"]
