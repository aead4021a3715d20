"""PostgreSQL implementation of IMemberProfileRepository.

Read-only: profile rows are written by the registration flow.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database import transaction
from membership.domain.aggregates import MemberProfile
from membership.domain.value_objects import MemberId
from membership.infrastructure.models import MemberProfileModel
from membership.infrastructure.observability import (
    DefaultMemberProfileRepositoryProbe,
    MemberProfileRepositoryProbe,
)
from membership.ports.exceptions import StoreUnavailableError
from membership.ports.repositories import IMemberProfileRepository


class MemberProfileRepository(IMemberProfileRepository):
    """PostgreSQL-backed lookup of member profile rows."""

    def __init__(
        self,
        session: AsyncSession,
        probe: MemberProfileRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultMemberProfileRepositoryProbe()

    async def get_by_id(self, member_id: MemberId) -> MemberProfile | None:
        """Retrieve the profile row of a member.

        Args:
            member_id: The member (auth subject) id

        Returns:
            The MemberProfile, or None if no row exists

        Raises:
            StoreUnavailableError: If the database fails
        """
        stmt = select(MemberProfileModel).where(MemberProfileModel.id == member_id.value)
        try:
            async with transaction(self._session) as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as exc:
            self._probe.store_error("get_by_id", str(exc))
            raise StoreUnavailableError("Profile store unavailable") from exc

        if model is None:
            self._probe.profile_not_found(member_id.value)
            return None

        self._probe.profile_retrieved(member_id.value)
        return self._to_domain(model)

    async def get_many(
        self, member_ids: list[MemberId]
    ) -> dict[MemberId, MemberProfile]:
        """Retrieve the profile rows that exist for several members.

        Members without a row are absent from the result.
        """
        if not member_ids:
            return {}

        stmt = select(MemberProfileModel).where(
            MemberProfileModel.id.in_([member_id.value for member_id in member_ids])
        )
        try:
            async with transaction(self._session) as session:
                result = await session.execute(stmt)
                models = result.scalars().all()
        except (SQLAlchemyError, OSError) as exc:
            self._probe.store_error("get_many", str(exc))
            raise StoreUnavailableError("Profile store unavailable") from exc

        profiles = {MemberId(value=model.id): self._to_domain(model) for model in models}
        self._probe.profiles_retrieved(requested=len(member_ids), found=len(profiles))
        return profiles

    @staticmethod
    def _to_domain(model: MemberProfileModel) -> MemberProfile:
        return MemberProfile(
            id=MemberId(value=model.id),
            email=model.email,
            name=model.name,
            age=model.age,
            city=model.city,
            favorite_sport=model.favorite_sport,
            avatar_url=model.avatar_url,
            is_premium=model.is_premium,
        )
