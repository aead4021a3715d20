"""Pending-request tracking for participation controls.

A client SDK helper: callers that drive join and leave controls use it to
keep one request in flight per pair. The application services never use it.

While a request is in flight the pair shows PENDING, distinct from
CONFIRMED and NOT_MEMBER, and only an authoritative snapshot from the
service resolves it. No state is flipped optimistically.
"""

from __future__ import annotations

from dataclasses import dataclass

from membership.application.value_objects import MembershipSnapshot
from membership.domain.value_objects import (
    EventId,
    MemberId,
    MembershipState,
    ParticipationAction,
)


class RequestInFlightError(Exception):
    """Raised when a second request starts for a pair that is still pending."""

    pass


@dataclass(frozen=True)
class PendingKey:
    """One (event, member) pair tracked by the UI."""

    event_id: EventId
    member_id: MemberId


@dataclass(frozen=True)
class ParticipationView:
    """What the participation control should display for a pair."""

    state: MembershipState
    pending_action: ParticipationAction | None = None
    snapshot: MembershipSnapshot | None = None


class PendingParticipationTracker:
    """Tracks in-flight participation requests and the last snapshot per pair."""

    def __init__(self) -> None:
        self._in_flight: dict[PendingKey, ParticipationAction] = {}
        self._snapshots: dict[PendingKey, MembershipSnapshot] = {}

    def begin(self, key: PendingKey, action: ParticipationAction) -> ParticipationView:
        """Mark a request as in flight.

        Raises:
            RequestInFlightError: If the pair already has a request in flight
        """
        if key in self._in_flight:
            raise RequestInFlightError(
                f"{self._in_flight[key].value} already pending for event "
                f"{key.event_id.value}"
            )
        self._in_flight[key] = action
        return self.view(key)

    def resolve(self, key: PendingKey, snapshot: MembershipSnapshot) -> ParticipationView:
        """Clear the pending marker with the authoritative snapshot."""
        self._in_flight.pop(key, None)
        self._snapshots[key] = snapshot
        return self.view(key)

    def fail(self, key: PendingKey) -> ParticipationView:
        """Clear the pending marker, reverting to the last known snapshot."""
        self._in_flight.pop(key, None)
        return self.view(key)

    def is_pending(self, key: PendingKey) -> bool:
        """Whether the pair has a request in flight."""
        return key in self._in_flight

    def view(self, key: PendingKey) -> ParticipationView:
        """Current display state of a pair."""
        snapshot = self._snapshots.get(key)
        action = self._in_flight.get(key)
        if action is not None:
            return ParticipationView(
                state=MembershipState.PENDING,
                pending_action=action,
                snapshot=snapshot,
            )
        if snapshot is None:
            return ParticipationView(state=MembershipState.NOT_MEMBER)
        return ParticipationView(state=snapshot.state, snapshot=snapshot)
