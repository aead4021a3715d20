"""Ports (interfaces) for the membership bounded context."""

from membership.ports.repositories import (
    IEventCatalog,
    IMemberProfileRepository,
    IParticipationStore,
)
from membership.ports.sessions import ISessionSource, SessionIdentity

__all__ = [
    "IEventCatalog",
    "IMemberProfileRepository",
    "IParticipationStore",
    "ISessionSource",
    "SessionIdentity",
]
