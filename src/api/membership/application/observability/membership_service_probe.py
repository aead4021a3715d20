"""Protocol for membership service observability.

Defines the interface for domain probes that capture application-level
domain events for join, leave and check-in operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class MembershipServiceProbe(Protocol):
    """Domain probe for membership service operations."""

    def member_joined(
        self, event_id: str, member_id: str, count: int, was_member: bool
    ) -> None:
        """Record that a join completed (new or idempotent)."""
        ...

    def join_rejected(self, event_id: str, member_id: str, reason: str) -> None:
        """Record that a join was rejected for a business reason."""
        ...

    def duplicate_join_absorbed(self, event_id: str, member_id: str) -> None:
        """Record that a concurrent duplicate insert was treated as success."""
        ...

    def member_left(self, event_id: str, member_id: str, was_member: bool) -> None:
        """Record that a leave completed (removed or no-op)."""
        ...

    def member_checked_in(self, event_id: str, member_id: str) -> None:
        """Record that a member checked in."""
        ...

    def check_in_rejected(self, event_id: str, member_id: str, reason: str) -> None:
        """Record that a check-in was rejected."""
        ...

    def store_unavailable(self, event_id: str, operation: str, error: str) -> None:
        """Record that persistence failed during an operation."""
        ...

    def with_context(self, context: ObservationContext) -> MembershipServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMembershipServiceProbe:
    """Default implementation of MembershipServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultMembershipServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultMembershipServiceProbe(logger=self._logger, context=context)

    def member_joined(
        self, event_id: str, member_id: str, count: int, was_member: bool
    ) -> None:
        """Record that a join completed (new or idempotent)."""
        self._logger.info(
            "member_joined",
            event_id=event_id,
            member_id=member_id,
            count=count,
            was_member=was_member,
            **self._get_context_kwargs(),
        )

    def join_rejected(self, event_id: str, member_id: str, reason: str) -> None:
        """Record that a join was rejected for a business reason."""
        self._logger.info(
            "join_rejected",
            event_id=event_id,
            member_id=member_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def duplicate_join_absorbed(self, event_id: str, member_id: str) -> None:
        """Record that a concurrent duplicate insert was treated as success."""
        self._logger.debug(
            "duplicate_join_absorbed",
            event_id=event_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def member_left(self, event_id: str, member_id: str, was_member: bool) -> None:
        """Record that a leave completed (removed or no-op)."""
        self._logger.info(
            "member_left",
            event_id=event_id,
            member_id=member_id,
            was_member=was_member,
            **self._get_context_kwargs(),
        )

    def member_checked_in(self, event_id: str, member_id: str) -> None:
        """Record that a member checked in."""
        self._logger.info(
            "member_checked_in",
            event_id=event_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def check_in_rejected(self, event_id: str, member_id: str, reason: str) -> None:
        """Record that a check-in was rejected."""
        self._logger.info(
            "check_in_rejected",
            event_id=event_id,
            member_id=member_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def store_unavailable(self, event_id: str, operation: str, error: str) -> None:
        """Record that persistence failed during an operation."""
        self._logger.error(
            "membership_store_unavailable",
            event_id=event_id,
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
