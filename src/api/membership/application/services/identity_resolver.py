"""Identity resolution for the membership context.

Turns an authenticated session into a stable Member through one ordered
fallback chain: durable profile row first, identity-provider metadata
attached to the session second.
"""

from __future__ import annotations

from membership.application.observability import (
    DefaultIdentityResolverProbe,
    IdentityResolverProbe,
)
from membership.domain.aggregates import Member, MemberProfile
from membership.domain.value_objects import MemberId, MemberSource
from membership.ports.exceptions import (
    IdentityUnavailableError,
    InvalidSessionError,
    StoreUnavailableError,
)
from membership.ports.repositories import IMemberProfileRepository
from membership.ports.sessions import ISessionSource


class IdentityResolver:
    """Resolves session ids to Members.

    Read-only: profile creation belongs to the registration flow. Repeated
    calls for the same session return equal Members until a profile write
    happens.
    """

    def __init__(
        self,
        session_source: ISessionSource,
        profile_repository: IMemberProfileRepository,
        probe: IdentityResolverProbe | None = None,
    ):
        """Initialize IdentityResolver with dependencies.

        Args:
            session_source: Verifies session ids and exposes their identity data
            profile_repository: Durable member-profile store
            probe: Optional domain probe for observability
        """
        self._session_source = session_source
        self._profile_repository = profile_repository
        self._probe = probe or DefaultIdentityResolverProbe()

    async def resolve(self, session_id: str | None) -> Member:
        """Resolve a session to a Member.

        Resolution order, each step tried only if the previous one is
        unavailable or fails:

        1. The durable profile row for the session subject.
        2. Metadata attached to the session by the identity provider,
           producing a transient Member.

        Both steps fill missing fields with the same defaults.

        Args:
            session_id: Opaque session id (bearer access token)

        Returns:
            The resolved Member

        Raises:
            IdentityUnavailableError: If there is no valid session or neither
                source can produce a member
        """
        if not session_id:
            self._probe.identity_unavailable(reason="missing_session")
            raise IdentityUnavailableError("No session presented")

        try:
            session = await self._session_source.get_session(session_id)
        except InvalidSessionError as e:
            self._probe.identity_unavailable(reason=str(e))
            raise IdentityUnavailableError(f"Session rejected: {e}") from e

        try:
            member_id = MemberId.from_string(session.subject_id)
        except ValueError as e:
            self._probe.identity_unavailable(reason="invalid_subject")
            raise IdentityUnavailableError("Session subject is not usable") from e

        profile = await self._lookup_profile(member_id)
        if profile is not None:
            member = Member.from_profile(profile, fallback_email=session.email)
        elif session.metadata is not None:
            member = Member.from_attributes(
                member_id=member_id,
                attributes=session.metadata,
                email=session.email,
                source=MemberSource.SESSION_METADATA,
            )
        else:
            self._probe.identity_unavailable(reason="no_profile_or_metadata")
            raise IdentityUnavailableError(
                f"No profile or session metadata for subject {member_id.value}"
            )

        self._probe.identity_resolved(
            member_id=member.id.value, source=member.source.value
        )
        return member

    async def _lookup_profile(self, member_id: MemberId) -> MemberProfile | None:
        """Query the profile store, treating failure as "unavailable"."""
        try:
            profile = await self._profile_repository.get_by_id(member_id)
        except StoreUnavailableError as e:
            self._probe.profile_lookup_failed(member_id=member_id.value, error=str(e))
            return None

        if profile is None:
            self._probe.profile_missing(member_id=member_id.value)
        return profile
