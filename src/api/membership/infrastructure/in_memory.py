"""In-memory adapters for the membership ports.

Used for local development and tests. State is held by the adapter
instances that are injected, never in module globals, so each test builds
its own world.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Callable, Iterable

from membership.domain.aggregates import Event, MemberProfile, Membership
from membership.domain.capacity_guard import Reject, decide
from membership.domain.value_objects import EventId, MemberId, ParticipationAction
from membership.ports.exceptions import (
    CapacityExceededError,
    InvalidSessionError,
    MembershipAlreadyExistsError,
    MembershipNotFoundError,
)
from membership.ports.repositories import (
    IEventCatalog,
    IMemberProfileRepository,
    IParticipationStore,
)
from membership.ports.sessions import ISessionSource, SessionIdentity


def _utc_now() -> datetime:
    return datetime.now(UTC)


class InMemoryParticipationStore(IParticipationStore):
    """Participation store backed by a dict keyed by (event, member).

    Inserts hold a per-event asyncio.Lock across the count and the write, so
    concurrent joins of one event serialize the same way they do on the
    event row lock in PostgreSQL.

    One lock is created per event on its first insert and kept for the
    lifetime of the store, so the lock map grows with the number of events
    ever joined. The store is meant for tests and local runs; long-lived
    deployments use the PostgreSQL store.
    """

    def __init__(
        self,
        memberships: Iterable[Membership] = (),
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._memberships: dict[tuple[EventId, MemberId], Membership] = {
            (m.event_id, m.member_id): m for m in memberships
        }
        self._locks: dict[EventId, asyncio.Lock] = {}
        self._clock = clock

    def _lock_for(self, event_id: EventId) -> asyncio.Lock:
        lock = self._locks.get(event_id)
        if lock is None:
            lock = self._locks[event_id] = asyncio.Lock()
        return lock

    async def count_for(self, event_id: EventId) -> int:
        return sum(1 for key in self._memberships if key[0] == event_id)

    async def has(self, event_id: EventId, member_id: MemberId) -> bool:
        return (event_id, member_id) in self._memberships

    async def get(self, event_id: EventId, member_id: MemberId) -> Membership | None:
        return self._memberships.get((event_id, member_id))

    async def list_for(self, event_id: EventId) -> list[Membership]:
        memberships = [m for key, m in self._memberships.items() if key[0] == event_id]
        return sorted(memberships, key=lambda m: (m.confirmed_at, m.member_id.value))

    async def insert(
        self, event_id: EventId, member_id: MemberId, capacity: int | None
    ) -> Membership:
        async with self._lock_for(event_id):
            if (event_id, member_id) in self._memberships:
                raise MembershipAlreadyExistsError(
                    f"Member {member_id.value} already joined {event_id.value}"
                )

            count = await self.count_for(event_id)
            # Give other joins a chance to run while the lock is held
            await asyncio.sleep(0)

            decision = decide(
                current_count=count,
                capacity=capacity,
                action=ParticipationAction.JOIN,
                already_member=False,
            )
            if isinstance(decision, Reject):
                raise CapacityExceededError(event_id, capacity)

            membership = Membership.confirm(event_id, member_id, self._clock())
            self._memberships[(event_id, member_id)] = membership
            return membership

    async def remove(self, event_id: EventId, member_id: MemberId) -> None:
        async with self._lock_for(event_id):
            if self._memberships.pop((event_id, member_id), None) is None:
                raise MembershipNotFoundError(
                    f"Member {member_id.value} has not joined {event_id.value}"
                )

    async def mark_checked_in(
        self, event_id: EventId, member_id: MemberId, at: datetime
    ) -> Membership:
        async with self._lock_for(event_id):
            membership = self._memberships.get((event_id, member_id))
            if membership is None:
                raise MembershipNotFoundError(
                    f"Member {member_id.value} has not joined {event_id.value}"
                )
            checked_in = membership.check_in(at)
            self._memberships[(event_id, member_id)] = checked_in
            return checked_in


class InMemoryEventCatalog(IEventCatalog):
    """Event catalog backed by a dict."""

    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._events: dict[EventId, Event] = {event.id: event for event in events}

    def add(self, event: Event) -> None:
        """Add or replace an event."""
        self._events[event.id] = event

    async def get_by_id(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)


class InMemoryMemberProfileRepository(IMemberProfileRepository):
    """Profile store backed by a dict."""

    def __init__(self, profiles: Iterable[MemberProfile] = ()) -> None:
        self._profiles: dict[MemberId, MemberProfile] = {
            profile.id: profile for profile in profiles
        }

    def add(self, profile: MemberProfile) -> None:
        """Add or replace a profile row, as the registration flow would."""
        self._profiles[profile.id] = profile

    async def get_by_id(self, member_id: MemberId) -> MemberProfile | None:
        return self._profiles.get(member_id)

    async def get_many(
        self, member_ids: list[MemberId]
    ) -> dict[MemberId, MemberProfile]:
        return {
            member_id: self._profiles[member_id]
            for member_id in member_ids
            if member_id in self._profiles
        }


class InMemorySessionSource(ISessionSource):
    """Session source backed by a dict of session id to identity."""

    def __init__(self, sessions: dict[str, SessionIdentity] | None = None) -> None:
        self._sessions: dict[str, SessionIdentity] = dict(sessions or {})

    def add(self, session_id: str, identity: SessionIdentity) -> None:
        """Register a live session."""
        self._sessions[session_id] = identity

    def revoke(self, session_id: str) -> None:
        """Expire a session."""
        self._sessions.pop(session_id, None)

    async def get_session(self, session_id: str) -> SessionIdentity:
        identity = self._sessions.get(session_id)
        if identity is None:
            raise InvalidSessionError("Unknown or expired session")
        return identity
