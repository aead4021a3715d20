"""Capacity guard: the pure admission decision for participation requests.

The guard never touches storage. Callers must evaluate it against a count
read in the same atomic step as the write they are guarding; durable
stores re-run it inside their insert transaction.
"""

from __future__ import annotations

from dataclasses import dataclass

from membership.domain.value_objects import ParticipationAction, RejectionReason


@dataclass(frozen=True)
class Accept:
    """The request may be applied."""


@dataclass(frozen=True)
class Reject:
    """The request must not be applied."""

    reason: RejectionReason


Decision = Accept | Reject


def decide(
    current_count: int,
    capacity: int | None,
    action: ParticipationAction,
    already_member: bool,
) -> Decision:
    """Decide whether a participation request is admissible.

    Args:
        current_count: Number of memberships the event currently has
        capacity: Participant cap, None for unlimited
        action: Requested action
        already_member: Whether the requester already holds a membership

    Returns:
        Accept, or Reject carrying the business reason
    """
    if action is ParticipationAction.LEAVE:
        return Accept()

    if action is ParticipationAction.CHECK_IN:
        if already_member:
            return Accept()
        return Reject(RejectionReason.NOT_A_MEMBER)

    # JOIN: re-joining is an idempotent no-op
    if already_member:
        return Accept()
    if capacity is None or current_count < capacity:
        return Accept()
    return Reject(RejectionReason.CAPACITY_EXCEEDED)
