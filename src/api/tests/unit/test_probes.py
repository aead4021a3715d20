"""Unit tests for domain probes.

Tests that domain probes correctly capture domain events
following the Domain Oriented Observability pattern.
"""

from unittest.mock import MagicMock

import structlog

from infrastructure.observability import ObservationContext
from infrastructure.observability.probes import (
    DefaultConnectionProbe,
)
from membership.application.observability import (
    DefaultIdentityResolverProbe,
    DefaultMembershipServiceProbe,
)
from membership.infrastructure.observability import (
    DefaultParticipationStoreProbe,
    DefaultSessionSourceProbe,
)


class TestConnectionProbe:
    """Tests for ConnectionProbe protocol and implementation."""

    def test_default_probe_creates_with_default_logger(self):
        """Default probe should work without explicit logger."""
        probe = DefaultConnectionProbe()
        assert probe._logger is not None

    def test_default_probe_accepts_custom_logger(self):
        """Default probe should accept a custom logger."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)
        assert probe._logger is mock_logger

    def test_pool_initialized_logs_info(self):
        """pool_initialized should log the pool bounds."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.pool_initialized(min_conn=2, max_conn=10)

        mock_logger.info.assert_called_once_with(
            "connection_pool_initialized",
            min_connections=2,
            max_connections=10,
        )

    def test_pool_closed_logs_info(self):
        """pool_closed should log info."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.pool_closed()

        mock_logger.info.assert_called_once_with("connection_pool_closed")


class TestMembershipServiceProbe:
    """Tests for MembershipServiceProbe implementation."""

    def test_member_joined_logs_info(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultMembershipServiceProbe(logger=mock_logger)

        probe.member_joined(event_id="e1", member_id="u1", count=3, was_member=False)

        mock_logger.info.assert_called_once_with(
            "member_joined",
            event_id="e1",
            member_id="u1",
            count=3,
            was_member=False,
        )

    def test_store_unavailable_logs_error(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultMembershipServiceProbe(logger=mock_logger)

        probe.store_unavailable(event_id="e1", operation="join", error="timeout")

        mock_logger.error.assert_called_once_with(
            "membership_store_unavailable",
            event_id="e1",
            operation="join",
            error="timeout",
        )

    def test_with_context_adds_request_metadata(self):
        """Context should be included in every log call."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        context = ObservationContext(request_id="req-1", client="10.0.0.1")
        probe = DefaultMembershipServiceProbe(logger=mock_logger).with_context(context)

        probe.join_rejected(event_id="e1", member_id="u1", reason="capacity_exceeded")

        mock_logger.info.assert_called_once_with(
            "join_rejected",
            event_id="e1",
            member_id="u1",
            reason="capacity_exceeded",
            request_id="req-1",
            client="10.0.0.1",
        )

    def test_with_context_keeps_logger(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultMembershipServiceProbe(logger=mock_logger)

        bound = probe.with_context(ObservationContext())

        assert bound is not probe
        assert bound._logger is mock_logger


class TestIdentityResolverProbe:
    def test_profile_lookup_failed_logs_warning(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultIdentityResolverProbe(logger=mock_logger)

        probe.profile_lookup_failed(member_id="u1", error="db down")

        mock_logger.warning.assert_called_once_with(
            "profile_lookup_failed", member_id="u1", error="db down"
        )

    def test_identity_unavailable_logs_warning(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultIdentityResolverProbe(logger=mock_logger)

        probe.identity_unavailable(reason="missing session")

        mock_logger.warning.assert_called_once_with(
            "identity_unavailable", reason="missing session"
        )


class TestParticipationStoreProbe:
    def test_store_error_logs_error_with_extra_context(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        context = ObservationContext().with_extra(worker="w1")
        probe = DefaultParticipationStoreProbe(logger=mock_logger).with_context(
            context
        )

        probe.store_error(operation="insert", error="connection reset")

        mock_logger.error.assert_called_once_with(
            "participation_store_error",
            operation="insert",
            error="connection reset",
            worker="w1",
        )


class TestSessionSourceProbe:
    def test_session_rejected_logs_warning(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultSessionSourceProbe(logger=mock_logger)

        probe.session_rejected(reason="Token expired")

        mock_logger.warning.assert_called_once_with(
            "session_rejected", reason="Token expired"
        )
