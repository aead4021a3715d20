"""SQLAlchemy ORM model for the event_participants table.

One row per confirmed (event, member) pair. The composite primary key
makes duplicate joins impossible at the database level.
"""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, utc_now


class EventParticipantModel(Base):
    """ORM model for event_participants table.

    Foreign Key Constraint:
    - event_id references events.id with CASCADE delete (memberships of a
      deleted event go with it)
    """

    __tablename__ = "event_participants"
    __table_args__ = (
        CheckConstraint(
            "(checked_in = false AND checked_in_at IS NULL) OR "
            "(checked_in = true AND checked_in_at IS NOT NULL "
            "AND checked_in_at >= confirmed_at)",
            name="ck_event_participants_check_in",
        ),
    )

    event_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("events.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(255), primary_key=True, index=True)
    confirmed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        nullable=False,
    )
    checked_in: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    checked_in_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<EventParticipantModel(event_id={self.event_id}, "
            f"user_id={self.user_id}, checked_in={self.checked_in})>"
        )
