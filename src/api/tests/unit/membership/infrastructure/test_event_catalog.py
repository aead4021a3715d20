"""Unit tests for the PostgreSQL EventCatalog."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from membership.domain.value_objects import EventId, MemberId
from membership.infrastructure.event_catalog import EventCatalog
from membership.infrastructure.models import EventModel
from membership.ports.exceptions import StoreUnavailableError
from membership.ports.repositories import IEventCatalog


@pytest.fixture
def catalog(mock_session):
    return EventCatalog(session=mock_session)


def _returning(mock_session, model):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = model
    mock_session.execute.return_value = mock_result


class TestEventCatalog:
    def test_implements_protocol(self, catalog):
        assert isinstance(catalog, IEventCatalog)

    @pytest.mark.asyncio
    async def test_returns_none_for_unknown_event(self, catalog, mock_session):
        _returning(mock_session, None)

        assert await catalog.get_by_id(EventId(value="missing")) is None

    @pytest.mark.asyncio
    async def test_maps_max_participants_to_capacity(self, catalog, mock_session):
        _returning(
            mock_session,
            EventModel(
                id="evt-1",
                name="Morning run",
                sport_type="running",
                location="Foz",
                starts_at=datetime(2026, 5, 10, 7, 0),
                max_participants=12,
                creator_id="organizer",
            ),
        )

        event = await catalog.get_by_id(EventId(value="evt-1"))

        assert event.capacity == 12
        assert event.creator_id == MemberId(value="organizer")
        assert event.name == "Morning run"
        assert event.starts_at == datetime(2026, 5, 10, 7, 0)

    @pytest.mark.asyncio
    async def test_null_max_participants_is_unlimited(self, catalog, mock_session):
        _returning(
            mock_session,
            EventModel(
                id="evt-2",
                name="Open padel",
                sport_type="padel",
                location="",
                starts_at=datetime(2026, 5, 10, 7, 0),
                max_participants=None,
                creator_id="organizer",
            ),
        )

        event = await catalog.get_by_id(EventId(value="evt-2"))

        assert event.is_unlimited is True

    @pytest.mark.asyncio
    async def test_database_error_becomes_store_unavailable(
        self, catalog, mock_session
    ):
        mock_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("refused")
        )

        with pytest.raises(StoreUnavailableError):
            await catalog.get_by_id(EventId(value="evt-1"))
