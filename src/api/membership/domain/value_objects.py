"""Value objects for the membership domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID

_MAX_ID_LENGTH = 255


def _validate_identifier(kind: str, value: str) -> str:
    """Validate an externally supplied identifier string."""
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"Invalid {kind}: empty value")
    if len(stripped) > _MAX_ID_LENGTH:
        raise ValueError(f"Invalid {kind}: longer than {_MAX_ID_LENGTH} characters")
    return stripped


@dataclass(frozen=True)
class EventId:
    """Identifier for an Event.

    Events are created by a separate flow; ids arrive as opaque strings
    (UUIDs from the hosted store, ULIDs for locally generated events).
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> EventId:
        """Generate a new EventId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> EventId:
        """Create EventId from string value.

        Raises:
            ValueError: If value is empty or too long
        """
        return cls(value=_validate_identifier("EventId", value))


@dataclass(frozen=True)
class MemberId:
    """Identifier for a Member.

    Equal to the subject id of the authenticated session, so it is stable
    across sessions and across profile-store migrations.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> MemberId:
        """Generate a new MemberId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> MemberId:
        """Create MemberId from string value.

        Raises:
            ValueError: If value is empty or too long
        """
        return cls(value=_validate_identifier("MemberId", value))


class MembershipState(StrEnum):
    """State of a member's relationship to one event.

    PENDING is never produced by the service; it marks a client-side
    request that has not been answered yet.
    """

    NOT_MEMBER = "not_member"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    PENDING = "pending"


class ParticipationAction(StrEnum):
    """Actions a member can request on an event."""

    JOIN = "join"
    LEAVE = "leave"
    CHECK_IN = "check_in"


class RejectionReason(StrEnum):
    """Business reasons for rejecting a participation request."""

    CAPACITY_EXCEEDED = "capacity_exceeded"
    NOT_A_MEMBER = "not_a_member"
    EVENT_CLOSED = "event_closed"


class MemberSource(StrEnum):
    """Where a resolved Member's data came from."""

    PROFILE = "profile"
    SESSION_METADATA = "session_metadata"
    PLACEHOLDER = "placeholder"
