"""
Vitrine Backend: User SQLAlchemy Model
========================================

What:  Administrator accounts. Only the bcrypt hash of the password is stored.
Who:   Created by the seed route, the seed CLI, or the admin register route.
       Never updated or deleted through the API.
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vitrine.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Uniqueness is enforced by the store; the register route checks first
    # and also maps a racing IntegrityError to "User already exists".
    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
