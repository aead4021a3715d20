"""Domain probes for membership repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to participation, profile and event
persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ParticipationStoreProbe(Protocol):
    """Domain probe for participation store operations."""

    def membership_inserted(self, event_id: str, member_id: str, count: int) -> None:
        """Record that a membership was inserted."""
        ...

    def insert_rejected_full(self, event_id: str, member_id: str, count: int) -> None:
        """Record that an insert found the event full under lock."""
        ...

    def duplicate_membership(self, event_id: str, member_id: str) -> None:
        """Record that an insert hit an existing membership."""
        ...

    def membership_removed(self, event_id: str, member_id: str) -> None:
        """Record that a membership was removed."""
        ...

    def membership_not_found(self, event_id: str, member_id: str) -> None:
        """Record that a pair had no membership."""
        ...

    def membership_checked_in(self, event_id: str, member_id: str) -> None:
        """Record that a membership was marked checked in."""
        ...

    def store_error(self, operation: str, error: str) -> None:
        """Record that the database rejected or failed an operation."""
        ...

    def with_context(self, context: ObservationContext) -> ParticipationStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultParticipationStoreProbe:
    """Default implementation of ParticipationStoreProbe using structlog."""

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
    ) -> DefaultParticipationStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultParticipationStoreProbe(logger=self._logger, context=context)

    def membership_inserted(self, event_id: str, member_id: str, count: int) -> None:
        """Record that a membership was inserted."""
        self._logger.info(
            "membership_inserted",
            event_id=event_id,
            member_id=member_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def insert_rejected_full(self, event_id: str, member_id: str, count: int) -> None:
        """Record that an insert found the event full under lock."""
        self._logger.info(
            "membership_insert_rejected_full",
            event_id=event_id,
            member_id=member_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def duplicate_membership(self, event_id: str, member_id: str) -> None:
        """Record that an insert hit an existing membership."""
        self._logger.debug(
            "duplicate_membership",
            event_id=event_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def membership_removed(self, event_id: str, member_id: str) -> None:
        """Record that a membership was removed."""
        self._logger.info(
            "membership_removed",
            event_id=event_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def membership_not_found(self, event_id: str, member_id: str) -> None:
        """Record that a pair had no membership."""
        self._logger.debug(
            "membership_not_found",
            event_id=event_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def membership_checked_in(self, event_id: str, member_id: str) -> None:
        """Record that a membership was marked checked in."""
        self._logger.info(
            "membership_checked_in",
            event_id=event_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def store_error(self, operation: str, error: str) -> None:
        """Record that the database rejected or failed an operation."""
        self._logger.error(
            "participation_store_error",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )


class MemberProfileRepositoryProbe(Protocol):
    """Domain probe for member profile lookups."""

    def profile_retrieved(self, member_id: str) -> None:
        """Record that a profile row was found."""
        ...

    def profile_not_found(self, member_id: str) -> None:
        """Record that no profile row exists."""
        ...

    def profiles_retrieved(self, requested: int, found: int) -> None:
        """Record a batch profile lookup."""
        ...

    def store_error(self, operation: str, error: str) -> None:
        """Record that the profile query failed."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> MemberProfileRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMemberProfileRepositoryProbe:
    """Default implementation of MemberProfileRepositoryProbe using structlog."""

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
    ) -> DefaultMemberProfileRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultMemberProfileRepositoryProbe(
            logger=self._logger, context=context
        )

    def profile_retrieved(self, member_id: str) -> None:
        """Record that a profile row was found."""
        self._logger.debug(
            "profile_retrieved",
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def profile_not_found(self, member_id: str) -> None:
        """Record that no profile row exists."""
        self._logger.debug(
            "profile_not_found",
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def profiles_retrieved(self, requested: int, found: int) -> None:
        """Record a batch profile lookup."""
        self._logger.debug(
            "profiles_retrieved",
            requested=requested,
            found=found,
            **self._get_context_kwargs(),
        )

    def store_error(self, operation: str, error: str) -> None:
        """Record that the profile query failed."""
        self._logger.error(
            "profile_store_error",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )


class EventCatalogProbe(Protocol):
    """Domain probe for event catalog lookups."""

    def event_retrieved(self, event_id: str) -> None:
        """Record that an event was found."""
        ...

    def event_not_found(self, event_id: str) -> None:
        """Record that an event does not exist."""
        ...

    def store_error(self, operation: str, error: str) -> None:
        """Record that the event query failed."""
        ...

    def with_context(self, context: ObservationContext) -> EventCatalogProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEventCatalogProbe:
    """Default implementation of EventCatalogProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultEventCatalogProbe:
        """Create a new probe with observation context bound."""
        return DefaultEventCatalogProbe(logger=self._logger, context=context)

    def event_retrieved(self, event_id: str) -> None:
        """Record that an event was found."""
        self._logger.debug(
            "event_retrieved",
            event_id=event_id,
            **self._get_context_kwargs(),
        )

    def event_not_found(self, event_id: str) -> None:
        """Record that an event does not exist."""
        self._logger.debug(
            "event_not_found",
            event_id=event_id,
            **self._get_context_kwargs(),
        )

    def store_error(self, operation: str, error: str) -> None:
        """Record that the event query failed."""
        self._logger.error(
            "event_catalog_error",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
