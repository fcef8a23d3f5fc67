"""Model for persisted contact form submissions."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_backend.db.session import Base
from portfolio_backend.db.time import utcnow


class Contact(Base):
    """A sanitized contact form submission.

    Rows are written once and never updated or deleted by the service.
    """

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.current_timestamp(),
    )

    # Supports the duplicate-submission lookup (same email within a window).
    __table_args__ = (Index("idx_email_created", "email", "created_at"),)
