"""Domain probes for the membership infrastructure layer."""

from membership.infrastructure.observability.repository_probe import (
    DefaultEventCatalogProbe,
    DefaultMemberProfileRepositoryProbe,
    DefaultParticipationStoreProbe,
    EventCatalogProbe,
    MemberProfileRepositoryProbe,
    ParticipationStoreProbe,
)
from membership.infrastructure.observability.session_source_probe import (
    DefaultSessionSourceProbe,
    SessionSourceProbe,
)

__all__ = [
    "DefaultEventCatalogProbe",
    "DefaultMemberProfileRepositoryProbe",
    "DefaultParticipationStoreProbe",
    "DefaultSessionSourceProbe",
    "EventCatalogProbe",
    "MemberProfileRepositoryProbe",
    "ParticipationStoreProbe",
    "SessionSourceProbe",
]
