"""Membership application layer.

Services run server-side behind the HTTP routes. PendingParticipationTracker
is the client-side helper for callers that drive the participation
controls (keeping one request in flight per pair); the service itself
never imports it.
"""

from membership.application.pending import (
    PendingKey,
    ParticipationView,
    PendingParticipationTracker,
    RequestInFlightError,
)
from membership.application.value_objects import MembershipSnapshot, ParticipantView

__all__ = [
    "MembershipSnapshot",
    "ParticipantView",
    "ParticipationView",
    "PendingKey",
    "PendingParticipationTracker",
    "RequestInFlightError",
]
