"""Membership application service.

Orchestrates join, leave and check-in requests: resolves the member,
consults the capacity guard, applies the change to the participation store
and returns the new authoritative snapshot.
"""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from typing import Callable

from membership.application.observability import (
    DefaultMembershipServiceProbe,
    MembershipServiceProbe,
)
from membership.application.services.identity_resolver import IdentityResolver
from membership.application.value_objects import MembershipSnapshot, ParticipantView
from membership.domain.aggregates import Event, Member
from membership.domain.capacity_guard import Reject, decide
from membership.domain.value_objects import EventId, ParticipationAction
from membership.ports.exceptions import (
    CapacityExceededError,
    EventClosedError,
    EventNotFoundError,
    MembershipAlreadyExistsError,
    MembershipNotFoundError,
    NotAMemberError,
    StoreUnavailableError,
)
from membership.ports.repositories import (
    IEventCatalog,
    IMemberProfileRepository,
    IParticipationStore,
)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class MembershipService:
    """Application service for event membership.

    State machine per (event, member) pair:
    NOT_MEMBER -> CONFIRMED -> CHECKED_IN, with leave from either
    CONFIRMED or CHECKED_IN back to NOT_MEMBER. Only joins can be closed
    at the event start; leave and check-in are never time-gated.

    The service performs no retries and does not debounce; the caller keeps
    at most one request in flight per pair and reconciles with the returned
    snapshot.
    """

    def __init__(
        self,
        identity_resolver: IdentityResolver,
        participation_store: IParticipationStore,
        event_catalog: IEventCatalog,
        profile_repository: IMemberProfileRepository,
        probe: MembershipServiceProbe | None = None,
        close_participation_at_start: bool = False,
        event_timezone: tzinfo = UTC,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize MembershipService with dependencies.

        Args:
            identity_resolver: Resolves sessions to members
            participation_store: Source of truth for memberships
            event_catalog: Read-only event metadata
            profile_repository: Profile rows for participant listings
            probe: Optional domain probe for observability
            close_participation_at_start: Reject joins after the event start
            event_timezone: Zone in which naive event start times are scheduled
            clock: Returns the current timezone-aware UTC time
        """
        self._identity_resolver = identity_resolver
        self._store = participation_store
        self._events = event_catalog
        self._profiles = profile_repository
        self._probe = probe or DefaultMembershipServiceProbe()
        self._close_participation_at_start = close_participation_at_start
        self._event_timezone = event_timezone
        self._clock = clock

    async def join(self, event_id: EventId, session_id: str | None) -> MembershipSnapshot:
        """Confirm the session's member for an event.

        Joining twice is a no-op returning the current snapshot.

        Args:
            event_id: The event to join
            session_id: The caller's session id

        Returns:
            Snapshot after the join

        Raises:
            IdentityUnavailableError: If the session cannot be resolved
            EventNotFoundError: If the event does not exist
            EventClosedError: If closing at start is enabled and the event
                has already started
            CapacityExceededError: If the event is full
            StoreUnavailableError: If persistence fails
        """
        member = await self._identity_resolver.resolve(session_id)
        event = await self._require_event(event_id)
        self._ensure_open(event)

        try:
            count = await self._store.count_for(event_id)
            already_member = await self._store.has(event_id, member.id)

            decision = decide(
                current_count=count,
                capacity=event.capacity,
                action=ParticipationAction.JOIN,
                already_member=already_member,
            )
            if isinstance(decision, Reject):
                self._probe.join_rejected(
                    event_id=event_id.value,
                    member_id=member.id.value,
                    reason=decision.reason.value,
                )
                raise CapacityExceededError(event_id, event.capacity)

            if not already_member:
                await self._insert(event, member)

            snapshot = await self._snapshot_for(event, member)
        except StoreUnavailableError as e:
            self._probe.store_unavailable(
                event_id=event_id.value, operation="join", error=str(e)
            )
            raise

        self._probe.member_joined(
            event_id=event_id.value,
            member_id=member.id.value,
            count=snapshot.count,
            was_member=already_member,
        )
        return snapshot

    async def leave(
        self, event_id: EventId, session_id: str | None
    ) -> MembershipSnapshot:
        """Cancel the session's member attendance of an event.

        Leaving while checked in is allowed. Leaving without a membership is
        a no-op returning the NOT_MEMBER snapshot.

        Raises:
            IdentityUnavailableError: If the session cannot be resolved
            EventNotFoundError: If the event does not exist
            StoreUnavailableError: If persistence fails
        """
        member = await self._identity_resolver.resolve(session_id)
        event = await self._require_event(event_id)

        was_member = True
        try:
            try:
                await self._store.remove(event_id, member.id)
            except MembershipNotFoundError:
                was_member = False

            snapshot = await self._snapshot_for(event, member)
        except StoreUnavailableError as e:
            self._probe.store_unavailable(
                event_id=event_id.value, operation="leave", error=str(e)
            )
            raise

        self._probe.member_left(
            event_id=event_id.value, member_id=member.id.value, was_member=was_member
        )
        return snapshot

    async def check_in(
        self, event_id: EventId, session_id: str | None
    ) -> MembershipSnapshot:
        """Mark the session's member as present at an event.

        Checking in again keeps the first check-in time.

        Raises:
            IdentityUnavailableError: If the session cannot be resolved
            EventNotFoundError: If the event does not exist
            NotAMemberError: If the member has not joined the event
            StoreUnavailableError: If persistence fails
        """
        member = await self._identity_resolver.resolve(session_id)
        event = await self._require_event(event_id)

        try:
            count = await self._store.count_for(event_id)
            already_member = await self._store.has(event_id, member.id)

            decision = decide(
                current_count=count,
                capacity=event.capacity,
                action=ParticipationAction.CHECK_IN,
                already_member=already_member,
            )
            if isinstance(decision, Reject):
                self._probe.check_in_rejected(
                    event_id=event_id.value,
                    member_id=member.id.value,
                    reason=decision.reason.value,
                )
                raise NotAMemberError(event_id, member.id)

            try:
                await self._store.mark_checked_in(event_id, member.id, self._clock())
            except MembershipNotFoundError as e:
                # Left between the membership check and the update
                self._probe.check_in_rejected(
                    event_id=event_id.value,
                    member_id=member.id.value,
                    reason="not_a_member",
                )
                raise NotAMemberError(event_id, member.id) from e

            snapshot = await self._snapshot_for(event, member)
        except StoreUnavailableError as e:
            self._probe.store_unavailable(
                event_id=event_id.value, operation="check_in", error=str(e)
            )
            raise

        self._probe.member_checked_in(
            event_id=event_id.value, member_id=member.id.value
        )
        return snapshot

    async def snapshot(
        self, event_id: EventId, session_id: str | None
    ) -> MembershipSnapshot:
        """Return the current snapshot without changing anything."""
        member = await self._identity_resolver.resolve(session_id)
        event = await self._require_event(event_id)
        return await self._snapshot_for(event, member)

    async def list_participants(self, event_id: EventId) -> list[ParticipantView]:
        """List the confirmed participants of an event.

        Participants without a profile row are shown with default-filled
        placeholder members.

        Raises:
            EventNotFoundError: If the event does not exist
            StoreUnavailableError: If persistence fails
        """
        await self._require_event(event_id)

        memberships = await self._store.list_for(event_id)
        profiles = await self._profiles.get_many([m.member_id for m in memberships])

        participants = []
        for membership in memberships:
            profile = profiles.get(membership.member_id)
            member = (
                Member.from_profile(profile)
                if profile is not None
                else Member.placeholder(membership.member_id)
            )
            participants.append(
                ParticipantView(
                    member=member,
                    confirmed_at=membership.confirmed_at,
                    checked_in=membership.checked_in,
                    checked_in_at=membership.checked_in_at,
                )
            )
        return participants

    async def _insert(self, event: Event, member: Member) -> None:
        """Insert the membership; the store re-checks capacity atomically."""
        try:
            await self._store.insert(event.id, member.id, event.capacity)
        except MembershipAlreadyExistsError:
            self._probe.duplicate_join_absorbed(
                event_id=event.id.value, member_id=member.id.value
            )
        except CapacityExceededError:
            # Another member took the last slot after our count was read
            self._probe.join_rejected(
                event_id=event.id.value,
                member_id=member.id.value,
                reason="capacity_exceeded",
            )
            raise

    async def _require_event(self, event_id: EventId) -> Event:
        event = await self._events.get_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _ensure_open(self, event: Event) -> None:
        if not self._close_participation_at_start:
            return
        local_now = (
            self._clock().astimezone(self._event_timezone).replace(tzinfo=None)
        )
        if event.has_started(local_now):
            raise EventClosedError(event.id, ParticipationAction.JOIN)

    async def _snapshot_for(self, event: Event, member: Member) -> MembershipSnapshot:
        membership = await self._store.get(event.id, member.id)
        count = await self._store.count_for(event.id)
        return MembershipSnapshot.build(
            event_id=event.id,
            member=member,
            membership=membership,
            count=count,
            capacity=event.capacity,
        )
