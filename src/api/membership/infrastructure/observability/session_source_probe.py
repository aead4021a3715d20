"""Domain probe for session verification.

Captures token verification outcomes without exposing token contents.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class SessionSourceProbe(Protocol):
    """Domain probe for session source operations."""

    def session_verified(self, subject_id: str, has_metadata: bool) -> None:
        """Record that a session token was verified."""
        ...

    def session_rejected(self, reason: str) -> None:
        """Record that a session token was rejected."""
        ...

    def with_context(self, context: ObservationContext) -> SessionSourceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSessionSourceProbe:
    """Default implementation of SessionSourceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSessionSourceProbe:
        """Create a new probe with observation context bound."""
        return DefaultSessionSourceProbe(logger=self._logger, context=context)

    def session_verified(self, subject_id: str, has_metadata: bool) -> None:
        """Record that a session token was verified."""
        self._logger.debug(
            "session_verified",
            subject_id=subject_id,
            has_metadata=has_metadata,
            **self._get_context_kwargs(),
        )

    def session_rejected(self, reason: str) -> None:
        """Record that a session token was rejected."""
        self._logger.warning(
            "session_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )
