"""Repository protocols (ports) for the membership bounded context.

The membership service only depends on these protocols; PostgreSQL and
in-memory implementations live in the infrastructure layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from membership.domain.aggregates import Event, MemberProfile, Membership
from membership.domain.value_objects import EventId, MemberId


@runtime_checkable
class IParticipationStore(Protocol):
    """Durable set of (event, member) memberships.

    Source of truth for who attends which event. All operations are scoped
    to one (event_id, member_id) pair; the store enforces no cross-event
    invariants. Infrastructure failures raise StoreUnavailableError.
    """

    async def count_for(self, event_id: EventId) -> int:
        """Return the current number of memberships of an event."""
        ...

    async def has(self, event_id: EventId, member_id: MemberId) -> bool:
        """Return whether the member holds a membership for the event."""
        ...

    async def get(self, event_id: EventId, member_id: MemberId) -> Membership | None:
        """Return the membership of the pair, or None."""
        ...

    async def list_for(self, event_id: EventId) -> list[Membership]:
        """Return all memberships of an event ordered by confirmation time."""
        ...

    async def insert(
        self, event_id: EventId, member_id: MemberId, capacity: int | None
    ) -> Membership:
        """Create a confirmed membership, atomically guarded by capacity.

        The count check and the insert MUST happen as one atomic operation
        against the store, so concurrent joins cannot oversell the event.

        Args:
            event_id: The event to join
            member_id: The joining member
            capacity: The event's participant cap, None for unlimited

        Returns:
            The created Membership

        Raises:
            MembershipAlreadyExistsError: If the pair already exists
            CapacityExceededError: If the event is full at write time
        """
        ...

    async def remove(self, event_id: EventId, member_id: MemberId) -> None:
        """Delete the membership of the pair.

        Raises:
            MembershipNotFoundError: If the pair has no membership
        """
        ...

    async def mark_checked_in(
        self, event_id: EventId, member_id: MemberId, at: datetime
    ) -> Membership:
        """Mark the pair's membership as checked in.

        Raises:
            MembershipNotFoundError: If the pair has no membership
        """
        ...


@runtime_checkable
class IMemberProfileRepository(Protocol):
    """Read access to the durable member-profile store.

    Profiles are written by the external registration flow only.
    """

    async def get_by_id(self, member_id: MemberId) -> MemberProfile | None:
        """Return the profile row for a member, or None if absent.

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        ...

    async def get_many(
        self, member_ids: list[MemberId]
    ) -> dict[MemberId, MemberProfile]:
        """Return the profile rows that exist for the given members."""
        ...


@runtime_checkable
class IEventCatalog(Protocol):
    """Read-only access to event metadata."""

    async def get_by_id(self, event_id: EventId) -> Event | None:
        """Return the event, or None if it does not exist.

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        ...
