from dataclasses import dataclass
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from stowtrack.database import Base


@dataclass(frozen=True)
class Root:
    """Position of a location with no parent."""


@dataclass(frozen=True)
class ChildOf:
    location_id: str


ParentRef = Root | ChildOf


def parent_ref(parent_location_id: str | None) -> ParentRef:
    """Blank and missing parent ids both mean root."""
    if parent_location_id is None or not parent_location_id.strip():
        return Root()
    return ChildOf(parent_location_id)


class Location(Base):
    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    # No relationship() on purpose: the hierarchy is only ever read as flat rows.
    parent_location_id: Mapped[str | None] = mapped_column(
        ForeignKey("locations.id", name="fk_locations_parent_location", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def parent(self) -> ParentRef:
        return parent_ref(self.parent_location_id)

    def __repr__(self) -> str:
        return f"Location(id={self.id!r}, name={self.name!r}, parent={self.parent_location_id!r})"
