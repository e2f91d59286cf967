"""Pet model for managing per-user pet records."""
import enum
import uuid
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Select,
    String,
    Uuid,
    event,
    select,
)
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column

from pet_registry.database import Base


# Column limits, shared with request validation
NAME_MAX_LENGTH = 256
DESCRIPTION_MAX_LENGTH = 1024
NFT_ID_MAX_LENGTH = 100
OWNER_NAME_MAX_LENGTH = 100
OWNER_ID_MAX_LENGTH = 100

TEXT_FIELDS = ("name", "description", "nft_id", "owner_name", "owner_id")


def utcnow() -> datetime:
    """Current time, evaluated on every call."""
    return datetime.now(timezone.utc)


class PetStatus(str, enum.Enum):
    """Lifecycle state of a pet. DISABLED is terminal (soft delete)."""
    ACTIVE = "active"
    DISABLED = "disabled"


class Pet(Base):
    """
    Pet record owned by exactly one user.

    The owner reference is bound at creation and never changed. Pets are
    never removed from the table: deleting one moves it to DISABLED, and
    every read goes through Pet.active() so disabled pets stay invisible.
    """
    __tablename__ = "pets"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        nullable=False
    )

    # Owning account
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Basic information
    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH),
        default="",
        nullable=False
    )
    description: Mapped[str] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH),
        default="",
        nullable=False
    )
    birth_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True
    )

    # External cross-reference, looked up without owner scoping
    nft_id: Mapped[str] = mapped_column(
        String(NFT_ID_MAX_LENGTH),
        default="",
        nullable=False,
        index=True
    )

    # Real-world owner, free text, unrelated to the owning account
    owner_name: Mapped[str] = mapped_column(
        String(OWNER_NAME_MAX_LENGTH),
        default="",
        nullable=False
    )
    owner_id: Mapped[str] = mapped_column(
        String(OWNER_ID_MAX_LENGTH),
        default="",
        nullable=False
    )

    # Lifecycle
    status: Mapped[PetStatus] = mapped_column(
        Enum(
            PetStatus,
            name="pet_status",
            native_enum=False,
            length=16,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=PetStatus.ACTIVE,
        nullable=False,
        index=True
    )

    # Timestamps
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )
    updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )

    def __init__(self, **kwargs) -> None:
        now = utcnow()
        kwargs.setdefault("created", now)
        kwargs.setdefault("updated", now)
        kwargs.setdefault("status", PetStatus.ACTIVE)
        for field in TEXT_FIELDS:
            kwargs.setdefault(field, "")
        super().__init__(**kwargs)

    @hybrid_property
    def enabled(self) -> bool:
        return self.status == PetStatus.ACTIVE

    @classmethod
    def active(cls) -> Select:
        """Base query for every read: only pets that are not soft-deleted."""
        return select(cls).where(cls.status == PetStatus.ACTIVE)

    def disable(self) -> None:
        self.status = PetStatus.DISABLED

    def __repr__(self) -> str:
        return f"<Pet(id={self.id}, name={self.name}, user_id={self.user_id})>"


@event.listens_for(Pet, "before_insert")
@event.listens_for(Pet, "before_update")
def refresh_updated_timestamp(mapper, connection, target: Pet) -> None:
    """Stamp `updated` right before any row is written."""
    target.updated = utcnow()
