"""Unit tests for the Event aggregate."""

from datetime import UTC, datetime

import pytest

from membership.domain.aggregates import Event
from membership.domain.value_objects import EventId, MemberId


def _event(**overrides) -> Event:
    fields = {
        "id": EventId(value="evt-1"),
        "starts_at": datetime(2026, 6, 1, 10, 0),
        "creator_id": MemberId(value="organizer"),
        "capacity": 4,
    }
    fields.update(overrides)
    return Event(**fields)


class TestEventInvariants:
    """Tests for Event validation."""

    @pytest.mark.parametrize("capacity", [0, -3])
    def test_rejects_non_positive_capacity(self, capacity):
        with pytest.raises(ValueError, match="at least 1"):
            _event(capacity=capacity)

    def test_rejects_timezone_aware_start(self):
        with pytest.raises(ValueError, match="timezone-naive"):
            _event(starts_at=datetime(2026, 6, 1, 10, 0, tzinfo=UTC))

    def test_none_capacity_is_unlimited(self):
        event = _event(capacity=None)
        assert event.is_unlimited is True
        assert event.remaining_spots(500) is None


class TestEventSchedule:
    """Tests for start-time checks."""

    def test_not_started_before_start(self):
        event = _event()
        assert event.has_started(datetime(2026, 6, 1, 9, 59)) is False

    def test_started_at_start_time(self):
        event = _event()
        assert event.has_started(datetime(2026, 6, 1, 10, 0)) is True


class TestRemainingSpots:
    """Tests for remaining_spots."""

    def test_counts_down(self):
        assert _event(capacity=4).remaining_spots(1) == 3

    def test_never_negative(self):
        assert _event(capacity=2).remaining_spots(5) == 0
