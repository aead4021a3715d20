"""Domain exceptions for the membership bounded context.

Business rejections derive from MembershipRejectedError and carry a
RejectionReason; they are deterministic and not worth retrying.
Infrastructure failures surface as StoreUnavailableError so callers can
tell a retryable fault from a hard rejection.
"""

from __future__ import annotations

from membership.domain.value_objects import (
    EventId,
    MemberId,
    ParticipationAction,
    RejectionReason,
)


class MembershipRejectedError(Exception):
    """Base class for business rejections of a participation request."""

    reason: RejectionReason

    def __init__(self, message: str, event_id: EventId):
        super().__init__(message)
        self.event_id = event_id


class CapacityExceededError(MembershipRejectedError):
    """Raised when a join is rejected because the event is full.

    Non-retryable: the user has to wait for someone to leave.
    """

    reason = RejectionReason.CAPACITY_EXCEEDED

    def __init__(self, event_id: EventId, capacity: int | None):
        super().__init__(
            f"Event {event_id.value} is full (capacity {capacity})", event_id
        )
        self.capacity = capacity


class NotAMemberError(MembershipRejectedError):
    """Raised when a check-in is attempted before joining the event."""

    reason = RejectionReason.NOT_A_MEMBER

    def __init__(self, event_id: EventId, member_id: MemberId):
        super().__init__(
            f"Member {member_id.value} has not joined event {event_id.value}",
            event_id,
        )
        self.member_id = member_id


class EventClosedError(MembershipRejectedError):
    """Raised when joining an event that has already started."""

    reason = RejectionReason.EVENT_CLOSED

    def __init__(self, event_id: EventId, action: ParticipationAction):
        super().__init__(
            f"Event {event_id.value} has started; cannot {action.value}", event_id
        )
        self.action = action


class IdentityUnavailableError(Exception):
    """Raised when no session is present or no member can be resolved.

    Surfaced to callers as an authentication-required condition.
    """

    pass


class InvalidSessionError(Exception):
    """Raised by session sources when a session id cannot be verified."""

    pass


class EventNotFoundError(Exception):
    """Raised when an operation targets an event the catalog does not know."""

    def __init__(self, event_id: EventId):
        super().__init__(f"Event {event_id.value} not found")
        self.event_id = event_id


class StoreUnavailableError(Exception):
    """Raised when a persistence call fails for infrastructure reasons.

    Retryable by the caller with backoff; the membership service itself
    never retries.
    """

    pass


class MembershipAlreadyExistsError(Exception):
    """Raised by stores when inserting a pair that already exists.

    Absorbed by the membership service (idempotent join).
    """

    pass


class MembershipNotFoundError(Exception):
    """Raised by stores when the (event, member) pair has no membership.

    Absorbed by the membership service on leave.
    """

    pass
