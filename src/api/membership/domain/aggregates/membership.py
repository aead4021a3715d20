"""Membership aggregate: one member's attendance of one event."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from membership.domain.value_objects import EventId, MemberId, MembershipState


@dataclass(frozen=True)
class Membership:
    """Confirmed attendance of a member at an event.

    Identified by the (event_id, member_id) pair. Created only by a
    successful join and destroyed only by an explicit leave.

    Invariant: checked_in implies checked_in_at is set and
    checked_in_at >= confirmed_at.
    """

    event_id: EventId
    member_id: MemberId
    confirmed_at: datetime
    checked_in: bool = False
    checked_in_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate the check-in invariant."""
        if self.checked_in:
            if self.checked_in_at is None:
                raise ValueError("checked_in membership requires checked_in_at")
            if self.checked_in_at < self.confirmed_at:
                raise ValueError("checked_in_at must not precede confirmed_at")
        elif self.checked_in_at is not None:
            raise ValueError("checked_in_at set on a membership not checked in")

    @classmethod
    def confirm(
        cls, event_id: EventId, member_id: MemberId, confirmed_at: datetime
    ) -> Membership:
        """Create a freshly confirmed membership."""
        return cls(event_id=event_id, member_id=member_id, confirmed_at=confirmed_at)

    @property
    def state(self) -> MembershipState:
        """State-machine position of this membership."""
        if self.checked_in:
            return MembershipState.CHECKED_IN
        return MembershipState.CONFIRMED

    def check_in(self, at: datetime) -> Membership:
        """Return the checked-in version of this membership.

        Checking in again keeps the original check-in time. A timestamp
        earlier than the confirmation (clock skew between writers) is
        clamped to confirmed_at.
        """
        if self.checked_in:
            return self
        return replace(self, checked_in=True, checked_in_at=max(at, self.confirmed_at))
