"""Pydantic models for membership API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from membership.application.value_objects import MembershipSnapshot, ParticipantView
from membership.domain.aggregates import Member
from membership.domain.value_objects import MemberSource, MembershipState


class MemberResponse(BaseModel):
    """Display projection of a member."""

    id: str = Field(..., description="Member ID (auth subject id)")
    display_name: str = Field(..., description="Name shown to other members")
    age: int = Field(..., description="Age in years")
    city: str = Field(..., description="Home city")
    favorite_sport: str = Field(..., description="Favorite sport")
    is_premium: bool = Field(..., description="Whether the member is premium")
    avatar_url: str | None = Field(default=None, description="Avatar image URL")
    source: MemberSource = Field(
        ..., description="Where the profile data was resolved from"
    )

    @classmethod
    def from_domain(cls, member: Member) -> MemberResponse:
        """Convert domain Member to API response."""
        return cls(
            id=member.id.value,
            display_name=member.display_name,
            age=member.age,
            city=member.city,
            favorite_sport=member.favorite_sport,
            is_premium=member.is_premium,
            avatar_url=member.avatar_ref,
            source=member.source,
        )


class MembershipSnapshotResponse(BaseModel):
    """Authoritative membership state returned by every operation."""

    event_id: str = Field(..., description="Event ID")
    state: MembershipState = Field(..., description="Membership state of the caller")
    count: int = Field(..., description="Current number of participants")
    capacity: int | None = Field(
        default=None, description="Participant cap, null when unlimited"
    )
    remaining_spots: int | None = Field(
        default=None, description="Open spots, null when unlimited"
    )
    is_full: bool = Field(..., description="Whether the event is full")
    member: MemberResponse
    confirmed_at: datetime | None = None
    checked_in_at: datetime | None = None

    @classmethod
    def from_domain(cls, snapshot: MembershipSnapshot) -> MembershipSnapshotResponse:
        """Convert a MembershipSnapshot to API response."""
        return cls(
            event_id=snapshot.event_id.value,
            state=snapshot.state,
            count=snapshot.count,
            capacity=snapshot.capacity,
            remaining_spots=snapshot.remaining_spots,
            is_full=snapshot.is_full,
            member=MemberResponse.from_domain(snapshot.member),
            confirmed_at=snapshot.confirmed_at,
            checked_in_at=snapshot.checked_in_at,
        )


class ParticipantResponse(BaseModel):
    """A confirmed participant of an event."""

    member: MemberResponse
    confirmed_at: datetime
    checked_in: bool
    checked_in_at: datetime | None = None

    @classmethod
    def from_domain(cls, participant: ParticipantView) -> ParticipantResponse:
        """Convert a ParticipantView to API response."""
        return cls(
            member=MemberResponse.from_domain(participant.member),
            confirmed_at=participant.confirmed_at,
            checked_in=participant.checked_in,
            checked_in_at=participant.checked_in_at,
        )
