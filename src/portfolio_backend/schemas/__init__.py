# src/portfolio_backend/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .contact import ContactRequest, ContactResponse

__all__ = ["ContactRequest", "ContactResponse"]
