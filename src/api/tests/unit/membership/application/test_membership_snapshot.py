"""Unit tests for MembershipSnapshot derivation."""

from datetime import UTC, datetime, timedelta

from membership.application.value_objects import MembershipSnapshot
from membership.domain.aggregates import Member, Membership
from membership.domain.value_objects import EventId, MemberId, MembershipState

EVENT_ID = EventId(value="evt-1")
MEMBER = Member.placeholder(MemberId(value="u1"))
CONFIRMED_AT = datetime(2026, 5, 4, 18, 0, tzinfo=UTC)


class TestBuild:
    def test_no_membership_is_not_member(self):
        snapshot = MembershipSnapshot.build(EVENT_ID, MEMBER, None, count=2, capacity=2)

        assert snapshot.state is MembershipState.NOT_MEMBER
        assert snapshot.confirmed_at is None
        assert snapshot.is_full is True
        assert snapshot.remaining_spots == 0

    def test_checked_in_membership_carries_timestamps(self):
        membership = Membership.confirm(EVENT_ID, MEMBER.id, CONFIRMED_AT).check_in(
            CONFIRMED_AT + timedelta(hours=1)
        )

        snapshot = MembershipSnapshot.build(
            EVENT_ID, MEMBER, membership, count=1, capacity=None
        )

        assert snapshot.state is MembershipState.CHECKED_IN
        assert snapshot.confirmed_at == CONFIRMED_AT
        assert snapshot.checked_in_at == CONFIRMED_AT + timedelta(hours=1)
        assert snapshot.remaining_spots is None
        assert snapshot.is_full is False
