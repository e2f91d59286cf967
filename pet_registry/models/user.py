"""User model for authentication and user management."""
from datetime import datetime
from typing import Optional

from fastapi_users.db import SQLAlchemyBaseUserTableUUID
from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from pet_registry.database import Base


class User(SQLAlchemyBaseUserTableUUID, Base):
    """
    User model extending fastapi-users base user table.

    The inherited UUID primary key is the session identity that owns pets.
    """
    __tablename__ = "users"

    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
