"""PostgreSQL implementation of IParticipationStore.

The capacity check and the insert of a join run in one transaction that
first locks the event row (SELECT ... FOR UPDATE). Concurrent joins for the
same event therefore serialize on that lock, and each one counts the
memberships committed by the joins before it.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database import transaction, utc_now
from membership.domain.aggregates import Membership
from membership.domain.capacity_guard import Reject, decide
from membership.domain.value_objects import EventId, MemberId, ParticipationAction
from membership.infrastructure.models import EventModel, EventParticipantModel
from membership.infrastructure.observability import (
    DefaultParticipationStoreProbe,
    ParticipationStoreProbe,
)
from membership.ports.exceptions import (
    CapacityExceededError,
    EventNotFoundError,
    MembershipAlreadyExistsError,
    MembershipNotFoundError,
    StoreUnavailableError,
)
from membership.ports.repositories import IParticipationStore


class ParticipationStore(IParticipationStore):
    """PostgreSQL-backed store of event memberships.

    Every method runs in its own transaction (or a savepoint when the
    session already has one open). Database and driver failures surface as
    StoreUnavailableError.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: ParticipationStoreProbe | None = None,
    ) -> None:
        """Initialize store with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultParticipationStoreProbe()

    @asynccontextmanager
    async def _unit(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with transaction(self._session) as session:
                yield session
        except (SQLAlchemyError, OSError) as exc:
            self._probe.store_error(operation, str(exc))
            raise StoreUnavailableError(
                f"Participation store unavailable during {operation}"
            ) from exc

    async def count_for(self, event_id: EventId) -> int:
        """Return the current number of memberships of an event."""
        async with self._unit("count_for") as session:
            return await self._count(session, event_id)

    async def has(self, event_id: EventId, member_id: MemberId) -> bool:
        """Return whether the member holds a membership for the event."""
        async with self._unit("has") as session:
            stmt = select(EventParticipantModel.user_id).where(
                EventParticipantModel.event_id == event_id.value,
                EventParticipantModel.user_id == member_id.value,
            )
            result = await session.execute(stmt)
            return result.scalar_one_or_none() is not None

    async def get(self, event_id: EventId, member_id: MemberId) -> Membership | None:
        """Return the membership of the pair, or None.

        A missing pair is an ordinary answer for reads and is not reported
        to the probe.
        """
        async with self._unit("get") as session:
            stmt = select(EventParticipantModel).where(
                EventParticipantModel.event_id == event_id.value,
                EventParticipantModel.user_id == member_id.value,
            )
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            return None
        return self._to_domain(model)

    async def list_for(self, event_id: EventId) -> list[Membership]:
        """Return all memberships of an event ordered by confirmation time."""
        async with self._unit("list_for") as session:
            stmt = (
                select(EventParticipantModel)
                .where(EventParticipantModel.event_id == event_id.value)
                .order_by(
                    EventParticipantModel.confirmed_at,
                    EventParticipantModel.user_id,
                )
            )
            result = await session.execute(stmt)
            models = result.scalars().all()

        return [self._to_domain(model) for model in models]

    async def insert(
        self, event_id: EventId, member_id: MemberId, capacity: int | None
    ) -> Membership:
        """Create a confirmed membership if the event still has room.

        Args:
            event_id: The event to join
            member_id: The joining member
            capacity: The event's participant cap, None for unlimited

        Returns:
            The created Membership

        Raises:
            EventNotFoundError: If the event row no longer exists
            MembershipAlreadyExistsError: If the pair already exists
            CapacityExceededError: If the event is full at write time
            StoreUnavailableError: If the database fails
        """
        async with self._unit("insert") as session:
            # Serializes all joins of this event until commit
            lock_stmt = (
                select(EventModel.id)
                .where(EventModel.id == event_id.value)
                .with_for_update()
            )
            locked = await session.execute(lock_stmt)
            if locked.scalar_one_or_none() is None:
                raise EventNotFoundError(event_id)

            exists_stmt = select(EventParticipantModel.user_id).where(
                EventParticipantModel.event_id == event_id.value,
                EventParticipantModel.user_id == member_id.value,
            )
            existing = await session.execute(exists_stmt)
            if existing.scalar_one_or_none() is not None:
                self._probe.duplicate_membership(event_id.value, member_id.value)
                raise MembershipAlreadyExistsError(
                    f"Member {member_id.value} already joined {event_id.value}"
                )

            count = await self._count(session, event_id)
            decision = decide(
                current_count=count,
                capacity=capacity,
                action=ParticipationAction.JOIN,
                already_member=False,
            )
            if isinstance(decision, Reject):
                self._probe.insert_rejected_full(event_id.value, member_id.value, count)
                raise CapacityExceededError(event_id, capacity)

            insert_stmt = (
                pg_insert(EventParticipantModel)
                .values(
                    event_id=event_id.value,
                    user_id=member_id.value,
                    confirmed_at=utc_now(),
                    checked_in=False,
                    checked_in_at=None,
                )
                .on_conflict_do_nothing(index_elements=["event_id", "user_id"])
                .returning(EventParticipantModel.confirmed_at)
            )
            inserted = await session.execute(insert_stmt)
            confirmed_at = inserted.scalar_one_or_none()
            if confirmed_at is None:
                self._probe.duplicate_membership(event_id.value, member_id.value)
                raise MembershipAlreadyExistsError(
                    f"Member {member_id.value} already joined {event_id.value}"
                )

        self._probe.membership_inserted(event_id.value, member_id.value, count + 1)
        return Membership.confirm(event_id, member_id, confirmed_at)

    async def remove(self, event_id: EventId, member_id: MemberId) -> None:
        """Delete the membership of the pair.

        Raises:
            MembershipNotFoundError: If the pair has no membership
            StoreUnavailableError: If the database fails
        """
        async with self._unit("remove") as session:
            stmt = delete(EventParticipantModel).where(
                EventParticipantModel.event_id == event_id.value,
                EventParticipantModel.user_id == member_id.value,
            )
            result = await session.execute(stmt)
            removed = result.rowcount

        if not removed:
            self._probe.membership_not_found(event_id.value, member_id.value)
            raise MembershipNotFoundError(
                f"Member {member_id.value} has not joined {event_id.value}"
            )
        self._probe.membership_removed(event_id.value, member_id.value)

    async def mark_checked_in(
        self, event_id: EventId, member_id: MemberId, at: datetime
    ) -> Membership:
        """Mark the pair's membership as checked in.

        A membership that is already checked in keeps its first timestamp.

        Raises:
            MembershipNotFoundError: If the pair has no membership
            StoreUnavailableError: If the database fails
        """
        async with self._unit("mark_checked_in") as session:
            stmt = (
                select(EventParticipantModel)
                .where(
                    EventParticipantModel.event_id == event_id.value,
                    EventParticipantModel.user_id == member_id.value,
                )
                .with_for_update()
            )
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
            if model is None:
                self._probe.membership_not_found(event_id.value, member_id.value)
                raise MembershipNotFoundError(
                    f"Member {member_id.value} has not joined {event_id.value}"
                )

            membership = self._to_domain(model).check_in(at)
            model.checked_in = membership.checked_in
            model.checked_in_at = membership.checked_in_at

        self._probe.membership_checked_in(event_id.value, member_id.value)
        return membership

    async def _count(self, session: AsyncSession, event_id: EventId) -> int:
        stmt = (
            select(func.count())
            .select_from(EventParticipantModel)
            .where(EventParticipantModel.event_id == event_id.value)
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    @staticmethod
    def _to_domain(model: EventParticipantModel) -> Membership:
        return Membership(
            event_id=EventId(value=model.event_id),
            member_id=MemberId(value=model.user_id),
            confirmed_at=model.confirmed_at,
            checked_in=bool(model.checked_in),
            checked_in_at=model.checked_in_at,
        )
