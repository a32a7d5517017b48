"""
Vitrine Backend: Project SQLAlchemy Model
===========================================

What:  Portfolio entries shown on the public site.
How:   `image_url` is the public URL of an upload stored by FileService
       (e.g. /uploads/1705312800000-storefront.jpg).
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vitrine.database import Base
from vitrine.models.submission import utcnow


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[str] = mapped_column(String(512), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_projects_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, title='{self.title}')>"
