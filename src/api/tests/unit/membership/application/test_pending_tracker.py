"""Unit tests for PendingParticipationTracker."""

import pytest

from membership.application import (
    PendingKey,
    PendingParticipationTracker,
    RequestInFlightError,
)
from membership.application.value_objects import MembershipSnapshot
from membership.domain.aggregates import Member
from membership.domain.value_objects import (
    EventId,
    MemberId,
    MembershipState,
    ParticipationAction,
)

KEY = PendingKey(event_id=EventId(value="evt-1"), member_id=MemberId(value="u1"))


def _snapshot(state: MembershipState, count: int) -> MembershipSnapshot:
    return MembershipSnapshot(
        event_id=KEY.event_id,
        state=state,
        count=count,
        capacity=4,
        member=Member.placeholder(KEY.member_id),
    )


@pytest.fixture
def tracker() -> PendingParticipationTracker:
    return PendingParticipationTracker()


class TestPendingTransitions:
    """Tests for begin/resolve/fail."""

    def test_unknown_pair_is_not_member(self, tracker):
        assert tracker.view(KEY).state is MembershipState.NOT_MEMBER
        assert tracker.is_pending(KEY) is False

    def test_begin_marks_pending(self, tracker):
        view = tracker.begin(KEY, ParticipationAction.JOIN)

        assert view.state is MembershipState.PENDING
        assert view.pending_action is ParticipationAction.JOIN
        assert tracker.is_pending(KEY) is True

    def test_second_request_while_pending_is_refused(self, tracker):
        tracker.begin(KEY, ParticipationAction.JOIN)

        with pytest.raises(RequestInFlightError):
            tracker.begin(KEY, ParticipationAction.LEAVE)

    def test_resolve_applies_authoritative_snapshot(self, tracker):
        tracker.begin(KEY, ParticipationAction.JOIN)

        view = tracker.resolve(KEY, _snapshot(MembershipState.CONFIRMED, 3))

        assert view.state is MembershipState.CONFIRMED
        assert view.snapshot.count == 3
        assert tracker.is_pending(KEY) is False

    def test_fail_reverts_to_last_snapshot(self, tracker):
        tracker.begin(KEY, ParticipationAction.JOIN)
        tracker.resolve(KEY, _snapshot(MembershipState.CONFIRMED, 3))
        tracker.begin(KEY, ParticipationAction.LEAVE)

        view = tracker.fail(KEY)

        assert view.state is MembershipState.CONFIRMED
        assert view.snapshot.count == 3

    def test_fail_without_history_reverts_to_not_member(self, tracker):
        tracker.begin(KEY, ParticipationAction.JOIN)

        view = tracker.fail(KEY)

        assert view.state is MembershipState.NOT_MEMBER

    def test_pending_view_keeps_previous_snapshot(self, tracker):
        tracker.resolve(KEY, _snapshot(MembershipState.CONFIRMED, 2))

        view = tracker.begin(KEY, ParticipationAction.CHECK_IN)

        assert view.state is MembershipState.PENDING
        assert view.snapshot.state is MembershipState.CONFIRMED

    def test_pairs_are_independent(self, tracker):
        other = PendingKey(event_id=EventId(value="evt-2"), member_id=KEY.member_id)
        tracker.begin(KEY, ParticipationAction.JOIN)

        view = tracker.begin(other, ParticipationAction.JOIN)

        assert view.state is MembershipState.PENDING
