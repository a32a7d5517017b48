"""
Vitrine Backend: Submission SQLAlchemy Model
==============================================

What:  ORM model for the `submissions` table (contact-form leads).
Who:   Written by the public contact route; read and deleted by the admin.

Lifecycle:
    1. Created when a visitor submits the contact form (status = 'New')
    2. Listed newest-first in the admin dashboard
    3. Deleted by the admin; never updated in place
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vitrine.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Submission(Base):
    """A contact-form submission. Every field is free text from the visitor."""

    __tablename__ = "submissions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    service: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # UTC; conversion to local time happens in the admin page
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Values: 'New' on creation; the API never changes it
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="New")

    __table_args__ = (
        Index("idx_submissions_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Submission(id={self.id}, status='{self.status}', created_at='{self.created_at}')>"
