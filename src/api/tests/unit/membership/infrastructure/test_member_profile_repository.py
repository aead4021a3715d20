"""Unit tests for MemberProfileRepository."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from membership.domain.value_objects import MemberId
from membership.infrastructure.member_profile_repository import (
    MemberProfileRepository,
)
from membership.infrastructure.models import MemberProfileModel
from membership.ports.exceptions import StoreUnavailableError
from membership.ports.repositories import IMemberProfileRepository


@pytest.fixture
def repository(mock_session):
    """Create repository with mock session."""
    return MemberProfileRepository(session=mock_session)


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IMemberProfileRepository)


class TestGetById:
    """Tests for get_by_id method."""

    @pytest.mark.asyncio
    async def test_returns_none_when_not_found(self, repository, mock_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = mock_result

        assert await repository.get_by_id(MemberId(value="u1")) is None

    @pytest.mark.asyncio
    async def test_maps_partial_row(self, repository, mock_session):
        """Rows from older sign-up flows have most columns empty."""
        model = MemberProfileModel(id="u1", name="Sam", city=None, age=None)
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = model
        mock_session.execute.return_value = mock_result

        profile = await repository.get_by_id(MemberId(value="u1"))

        assert profile.id == MemberId(value="u1")
        assert profile.name == "Sam"
        assert profile.city is None
        assert profile.age is None

    @pytest.mark.asyncio
    async def test_database_error_becomes_store_unavailable(
        self, repository, mock_session
    ):
        mock_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("timeout")
        )

        with pytest.raises(StoreUnavailableError):
            await repository.get_by_id(MemberId(value="u1"))


class TestGetMany:
    """Tests for get_many method."""

    @pytest.mark.asyncio
    async def test_empty_input_skips_query(self, repository, mock_session):
        assert await repository.get_many([]) == {}
        mock_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_returns_only_existing_rows(self, repository, mock_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [
            MemberProfileModel(id="u1", name="Sam")
        ]
        mock_session.execute.return_value = mock_result

        profiles = await repository.get_many(
            [MemberId(value="u1"), MemberId(value="u2")]
        )

        assert list(profiles) == [MemberId(value="u1")]
        assert profiles[MemberId(value="u1")].name == "Sam"
