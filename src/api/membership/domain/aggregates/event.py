"""Event aggregate (read-only within the membership context)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from membership.domain.value_objects import EventId, MemberId


@dataclass(frozen=True)
class Event:
    """A sports meetup members can join.

    Events are owned by their creator and mutated elsewhere; this context
    only reads the capacity and start time.

    Business rules:
    - capacity, when present, is at least 1 (None means unlimited)
    - starts_at is a timezone-naive local date and time
    """

    id: EventId
    starts_at: datetime
    creator_id: MemberId
    capacity: int | None = None
    name: str = ""
    sport_type: str = ""
    location: str = ""

    def __post_init__(self) -> None:
        """Validate event invariants."""
        if self.capacity is not None and self.capacity < 1:
            raise ValueError(
                f"Event capacity must be at least 1, got {self.capacity}"
            )
        if self.starts_at.tzinfo is not None:
            raise ValueError("Event starts_at must be a timezone-naive local time")

    @property
    def is_unlimited(self) -> bool:
        """Whether the event has no participant cap."""
        return self.capacity is None

    def has_started(self, local_now: datetime) -> bool:
        """Whether the event start time is at or before local_now."""
        return self.starts_at <= local_now

    def remaining_spots(self, count: int) -> int | None:
        """Open spots given the current count, or None when unlimited."""
        if self.capacity is None:
            return None
        return max(self.capacity - count, 0)
