"""Application-layer value objects for the membership context.

Read-only views returned to callers so they can re-render without a
second read.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from membership.domain.aggregates import Member, Membership
from membership.domain.value_objects import EventId, MembershipState


@dataclass(frozen=True)
class MembershipSnapshot:
    """Authoritative view of one member's standing on one event.

    Returned by every MembershipService operation.

    Attributes:
        event_id: The event
        state: State of the (event, member) pair
        count: Current number of confirmed memberships of the event
        capacity: Participant cap, None for unlimited
        member: The resolved member
        confirmed_at: When the member joined, if a member
        checked_in_at: When the member checked in, if checked in
    """

    event_id: EventId
    state: MembershipState
    count: int
    capacity: int | None
    member: Member
    confirmed_at: datetime | None = None
    checked_in_at: datetime | None = None

    @property
    def remaining_spots(self) -> int | None:
        """Open spots, or None for unlimited events."""
        if self.capacity is None:
            return None
        return max(self.capacity - self.count, 0)

    @property
    def is_full(self) -> bool:
        """Whether a new member could not join right now."""
        return self.capacity is not None and self.count >= self.capacity

    @classmethod
    def build(
        cls,
        event_id: EventId,
        member: Member,
        membership: Membership | None,
        count: int,
        capacity: int | None,
    ) -> MembershipSnapshot:
        """Derive the snapshot from the stored membership (if any)."""
        if membership is None:
            return cls(
                event_id=event_id,
                state=MembershipState.NOT_MEMBER,
                count=count,
                capacity=capacity,
                member=member,
            )
        return cls(
            event_id=event_id,
            state=membership.state,
            count=count,
            capacity=capacity,
            member=member,
            confirmed_at=membership.confirmed_at,
            checked_in_at=membership.checked_in_at,
        )


@dataclass(frozen=True)
class ParticipantView:
    """A confirmed participant of an event with their display projection."""

    member: Member
    confirmed_at: datetime
    checked_in: bool
    checked_in_at: datetime | None = None
