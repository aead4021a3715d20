"""FastAPI dependency wiring for the membership bounded context.

Repositories are built per request around the request's AsyncSession;
the session source is process-wide because it only holds verification
settings.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from infrastructure.observability import ObservationContext
from infrastructure.settings import get_auth_settings, get_membership_settings
from membership.application.observability import (
    DefaultIdentityResolverProbe,
    DefaultMembershipServiceProbe,
    IdentityResolverProbe,
    MembershipServiceProbe,
)
from membership.application.services import IdentityResolver, MembershipService
from membership.infrastructure.event_catalog import EventCatalog
from membership.infrastructure.member_profile_repository import (
    MemberProfileRepository,
)
from membership.infrastructure.observability import (
    DefaultEventCatalogProbe,
    DefaultMemberProfileRepositoryProbe,
    DefaultParticipationStoreProbe,
)
from membership.infrastructure.participation_store import ParticipationStore
from membership.infrastructure.session_source import JWTSessionSource
from membership.ports.repositories import (
    IEventCatalog,
    IMemberProfileRepository,
    IParticipationStore,
)
from membership.ports.sessions import ISessionSource

bearer_scheme = HTTPBearer(auto_error=False)


def get_session_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> str | None:
    """Extract the session id (bearer access token) from the request.

    Returns:
        The token, or None when the request carries no bearer credentials
    """
    if credentials is None:
        return None
    return credentials.credentials or None


@lru_cache
def get_session_source() -> ISessionSource:
    """Get the cached access-token session source."""
    settings = get_auth_settings()
    return JWTSessionSource(
        secret=settings.jwt_secret.get_secret_value(),
        audience=settings.audience,
        issuer=settings.issuer,
        algorithms=settings.algorithms,
    )


def get_observation_context(request: Request) -> ObservationContext:
    """Build the observation context bound to this request's probes.

    The request id is taken from the X-Request-ID header when a proxy
    sets one.
    """
    return ObservationContext(
        request_id=request.headers.get("X-Request-ID"),
        client=request.client.host if request.client else None,
    )


def get_participation_store(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> IParticipationStore:
    """Get ParticipationStore instance.

    Args:
        session: Async database session

    Returns:
        ParticipationStore bound to the request session
    """
    return ParticipationStore(
        session=session,
        probe=DefaultParticipationStoreProbe().with_context(context),
    )


def get_member_profile_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> IMemberProfileRepository:
    """Get MemberProfileRepository instance."""
    return MemberProfileRepository(
        session=session,
        probe=DefaultMemberProfileRepositoryProbe().with_context(context),
    )


def get_event_catalog(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> IEventCatalog:
    """Get EventCatalog instance."""
    return EventCatalog(
        session=session,
        probe=DefaultEventCatalogProbe().with_context(context),
    )


def get_identity_resolver_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> IdentityResolverProbe:
    """Get IdentityResolverProbe instance."""
    return DefaultIdentityResolverProbe().with_context(context)


def get_membership_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> MembershipServiceProbe:
    """Get MembershipServiceProbe instance."""
    return DefaultMembershipServiceProbe().with_context(context)


def get_identity_resolver(
    session_source: Annotated[ISessionSource, Depends(get_session_source)],
    profile_repository: Annotated[
        IMemberProfileRepository, Depends(get_member_profile_repository)
    ],
    probe: Annotated[IdentityResolverProbe, Depends(get_identity_resolver_probe)],
) -> IdentityResolver:
    """Get IdentityResolver instance."""
    return IdentityResolver(
        session_source=session_source,
        profile_repository=profile_repository,
        probe=probe,
    )


def get_membership_service(
    identity_resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
    participation_store: Annotated[
        IParticipationStore, Depends(get_participation_store)
    ],
    event_catalog: Annotated[IEventCatalog, Depends(get_event_catalog)],
    profile_repository: Annotated[
        IMemberProfileRepository, Depends(get_member_profile_repository)
    ],
    probe: Annotated[MembershipServiceProbe, Depends(get_membership_service_probe)],
) -> MembershipService:
    """Get MembershipService instance.

    All repositories share the request's session.
    """
    settings = get_membership_settings()
    return MembershipService(
        identity_resolver=identity_resolver,
        participation_store=participation_store,
        event_catalog=event_catalog,
        profile_repository=profile_repository,
        probe=probe,
        close_participation_at_start=settings.close_participation_at_start,
        event_timezone=settings.event_zone,
    )
