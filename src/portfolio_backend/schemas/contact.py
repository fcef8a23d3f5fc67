# src/portfolio_backend/schemas/contact.py
"""Contact form Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContactRequest(BaseModel):
    """Raw contact form payload.

    Fields are deliberately lenient; the contact policy reports every
    missing or malformed field at once instead of failing on the first.
    """

    name: str | None = Field(None, description="Sender name")
    email: str | None = Field(None, description="Sender email address")
    message: str | None = Field(None, description="Message body")
    honey_pot_field: Any = Field(
        None,
        description="Hidden field left empty by humans; any value marks a bot",
    )

    model_config = ConfigDict(extra="ignore")


class ContactResponse(BaseModel):
    """Successful (or silently blocked) submission response."""

    success: bool = True
    message: str | None = None
