"""
Vitrine Backend: Package SQLAlchemy Model
===========================================

What:  Pricing tiers shown on the packages page.

Lifecycle:
    1. Created once by the seed route (refused when any package exists)
    2. Partially updated by the admin
    3. Never deleted

`price` is a display string ("25,000", "Contact us"), not a number.
`features` keeps its order; it is stored as a JSON array.
"""

import uuid
from typing import List, Optional

from sqlalchemy import JSON, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vitrine.database import Base


class Package(Base):
    __tablename__ = "packages"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[str] = mapped_column(String(100), nullable=False)
    features: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cta_link: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    # Catalog order; the seed assigns 0, 1, 2
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, name='{self.name}', price='{self.price}')>"
