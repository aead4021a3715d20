"""PostgreSQL implementation of IEventCatalog."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database import transaction
from membership.domain.aggregates import Event
from membership.domain.value_objects import EventId, MemberId
from membership.infrastructure.models import EventModel
from membership.infrastructure.observability import (
    DefaultEventCatalogProbe,
    EventCatalogProbe,
)
from membership.ports.exceptions import StoreUnavailableError
from membership.ports.repositories import IEventCatalog


class EventCatalog(IEventCatalog):
    """Reads event metadata from the events table.

    The max_participants column maps to Event.capacity; NULL means the
    event has no participant cap.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: EventCatalogProbe | None = None,
    ) -> None:
        """Initialize catalog with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultEventCatalogProbe()

    async def get_by_id(self, event_id: EventId) -> Event | None:
        """Retrieve an event by its ID.

        Args:
            event_id: The unique identifier of the event

        Returns:
            The Event, or None if not found

        Raises:
            StoreUnavailableError: If the database fails
        """
        stmt = select(EventModel).where(EventModel.id == event_id.value)
        try:
            async with transaction(self._session) as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as exc:
            self._probe.store_error("get_by_id", str(exc))
            raise StoreUnavailableError("Event catalog unavailable") from exc

        if model is None:
            self._probe.event_not_found(event_id.value)
            return None

        self._probe.event_retrieved(event_id.value)
        return Event(
            id=EventId(value=model.id),
            starts_at=model.starts_at,
            creator_id=MemberId(value=model.creator_id),
            capacity=model.max_participants,
            name=model.name,
            sport_type=model.sport_type,
            location=model.location,
        )
