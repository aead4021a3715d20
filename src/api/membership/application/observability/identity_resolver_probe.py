"""Protocol for identity resolution observability.

Defines the interface for domain probes that capture how each session was
resolved to a member, including fallbacks taken along the chain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class IdentityResolverProbe(Protocol):
    """Domain probe for identity resolution."""

    def identity_resolved(self, member_id: str, source: str) -> None:
        """Record that a session was resolved to a member."""
        ...

    def profile_lookup_failed(self, member_id: str, error: str) -> None:
        """Record that the profile store could not be queried."""
        ...

    def profile_missing(self, member_id: str) -> None:
        """Record that no profile row exists for the subject."""
        ...

    def identity_unavailable(self, reason: str) -> None:
        """Record that no member could be resolved."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityResolverProbe:
    """Default implementation of IdentityResolverProbe using structlog."""

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
    ) -> DefaultIdentityResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityResolverProbe(logger=self._logger, context=context)

    def identity_resolved(self, member_id: str, source: str) -> None:
        """Record that a session was resolved to a member."""
        self._logger.debug(
            "identity_resolved",
            member_id=member_id,
            source=source,
            **self._get_context_kwargs(),
        )

    def profile_lookup_failed(self, member_id: str, error: str) -> None:
        """Record that the profile store could not be queried."""
        self._logger.warning(
            "profile_lookup_failed",
            member_id=member_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def profile_missing(self, member_id: str) -> None:
        """Record that no profile row exists for the subject."""
        self._logger.info(
            "profile_missing",
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def identity_unavailable(self, reason: str) -> None:
        """Record that no member could be resolved."""
        self._logger.warning(
            "identity_unavailable",
            reason=reason,
            **self._get_context_kwargs(),
        )
