"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the Membership bounded context.
"""

from pytest_archon import archrule


class TestMembershipDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not depend on infrastructure.

        The capacity rule and aggregates must not know about SQL or tokens.
        """
        (
            archrule("domain_no_infrastructure")
            .match("membership.domain*")
            .should_not_import("membership.infrastructure*", "infrastructure*")
            .check("membership")
        )

    def test_domain_does_not_import_application(self):
        """Domain objects should be usable without application services."""
        (
            archrule("domain_no_application")
            .match("membership.domain*")
            .should_not_import("membership.application*")
            .check("membership")
        )

    def test_domain_does_not_import_frameworks(self):
        """Domain objects should be framework-agnostic."""
        (
            archrule("domain_no_frameworks")
            .match("membership.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*", "jose*")
            .check("membership")
        )


class TestMembershipPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_does_not_import_infrastructure(self):
        """Ports define interfaces, not implementations."""
        (
            archrule("ports_no_infrastructure")
            .match("membership.ports*")
            .should_not_import("membership.infrastructure*")
            .check("membership")
        )

    def test_ports_does_not_import_application(self):
        """Ports are used by the application layer, not the reverse."""
        (
            archrule("ports_no_application")
            .match("membership.ports*")
            .should_not_import("membership.application*")
            .check("membership")
        )


class TestMembershipApplicationLayerBoundaries:
    """Tests that the application layer depends only on ports."""

    def test_application_does_not_import_infrastructure(self):
        """Services receive adapters through their constructors."""
        (
            archrule("application_no_infrastructure")
            .match("membership.application*")
            .should_not_import("membership.infrastructure*")
            .check("membership")
        )

    def test_application_does_not_import_presentation(self):
        (
            archrule("application_no_presentation")
            .match("membership.application*")
            .should_not_import("membership.presentation*", "fastapi*")
            .check("membership")
        )

    def test_services_do_not_import_client_helpers(self):
        """The pending tracker belongs to clients, not to the request path."""
        (
            archrule("services_no_pending_tracker")
            .match("membership.application.services*")
            .should_not_import("membership.application.pending")
            .check("membership", only_direct_imports=True)
        )
