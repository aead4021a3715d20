"""Shared builders for membership unit tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

import pytest

from membership.application.services import IdentityResolver, MembershipService
from membership.domain.aggregates import Event, MemberProfile
from membership.domain.value_objects import EventId, MemberId
from membership.infrastructure.in_memory import (
    InMemoryEventCatalog,
    InMemoryMemberProfileRepository,
    InMemoryParticipationStore,
    InMemorySessionSource,
)
from membership.ports.sessions import SessionIdentity

# Fixed "now" for every service under test; events start a week later.
NOW = datetime(2026, 5, 4, 18, 0, tzinfo=UTC)


def make_event(
    capacity: int | None = 10,
    event_id: str | None = None,
    starts_at: datetime | None = None,
) -> Event:
    """Build an event that starts in the future by default."""
    return Event(
        id=EventId(value=event_id) if event_id else EventId.generate(),
        starts_at=starts_at or datetime(2026, 5, 11, 19, 30),
        creator_id=MemberId(value="organizer"),
        capacity=capacity,
        name="Sunday five-a-side",
        sport_type="football",
        location="Parque da Cidade",
    )


class World:
    """In-memory stores plus a service wired to them."""

    def __init__(
        self,
        close_participation_at_start: bool = False,
        event_timezone: tzinfo = UTC,
    ) -> None:
        self.now = NOW
        self.sessions = InMemorySessionSource()
        self.profiles = InMemoryMemberProfileRepository()
        self.events = InMemoryEventCatalog()
        self.store = InMemoryParticipationStore(clock=self.clock)
        self.resolver = IdentityResolver(
            session_source=self.sessions, profile_repository=self.profiles
        )
        self.service = MembershipService(
            identity_resolver=self.resolver,
            participation_store=self.store,
            event_catalog=self.events,
            profile_repository=self.profiles,
            close_participation_at_start=close_participation_at_start,
            event_timezone=event_timezone,
            clock=self.clock,
        )

    def clock(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now = self.now + timedelta(**delta)

    def add_event(self, capacity: int | None = 10, **kwargs) -> Event:
        event = make_event(capacity=capacity, **kwargs)
        self.events.add(event)
        return event

    def add_member(self, subject_id: str, name: str | None = None) -> str:
        """Register a member with a profile row and return their session id."""
        self.profiles.add(
            MemberProfile(id=MemberId(value=subject_id), name=name or subject_id)
        )
        session_id = f"session-{subject_id}"
        self.sessions.add(
            session_id,
            SessionIdentity(subject_id=subject_id, email=f"{subject_id}@example.com"),
        )
        return session_id


@pytest.fixture
def world() -> World:
    """Fresh in-memory world per test."""
    return World()


@pytest.fixture
def closing_world() -> World:
    """In-memory world whose service closes joins at the event start.

    Event start times are scheduled in Sao Paulo local time.
    """
    return World(
        close_participation_at_start=True,
        event_timezone=ZoneInfo("America/Sao_Paulo"),
    )
