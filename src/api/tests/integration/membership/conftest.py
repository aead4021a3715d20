"""Integration test fixtures for the Membership bounded context.

Tables are created from the ORM metadata, and every test starts from
empty membership tables.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timedelta

import pytest_asyncio
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database import Base, create_write_engine
from infrastructure.settings import DatabaseSettings
from membership.domain.value_objects import EventId
from membership.infrastructure.models import (
    EventModel,
    EventParticipantModel,
    MemberProfileModel,
)


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine with the membership schema in place."""
    engine = create_write_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(
    engine: AsyncEngine,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Provide a session factory and clean membership tables around each test.

    Concurrent callers need one session each, so tests get the factory
    rather than a single session.
    """
    factory = async_sessionmaker(engine, expire_on_commit=False)

    async def _clean() -> None:
        async with factory() as session, session.begin():
            await session.execute(delete(EventParticipantModel))
            await session.execute(delete(EventModel))
            await session.execute(delete(MemberProfileModel))

    await _clean()
    yield factory
    await _clean()


@pytest_asyncio.fixture
async def create_event(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[EventId]]:
    """Insert an event row and return its id."""

    async def _create(capacity: int | None) -> EventId:
        event_id = EventId.generate()
        async with session_factory() as session, session.begin():
            session.add(
                EventModel(
                    id=event_id.value,
                    name="Thursday five-a-side",
                    sport_type="football",
                    location="Riverside pitch",
                    starts_at=datetime.now() + timedelta(days=2),
                    max_participants=capacity,
                    creator_id="organizer",
                )
            )
        return event_id

    return _create
