"""SQLAlchemy ORM model for the events table (read-only here)."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class EventModel(Base, TimestampMixin):
    """ORM model for events table.

    starts_at is stored without time zone: events are scheduled in the
    organizer's local time.
    """

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(
            "max_participants IS NULL OR max_participants >= 1",
            name="ck_events_max_participants_positive",
        ),
    )

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    sport_type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    location: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    max_participants: Mapped[int | None] = mapped_column(Integer, nullable=True)
    creator_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<EventModel(id={self.id}, name={self.name}, "
            f"max_participants={self.max_participants})>"
        )
