"""SQLAlchemy ORM models for the membership bounded context.

These models map to database tables and are used by repository implementations.
"""

from membership.infrastructure.models.event import EventModel
from membership.infrastructure.models.member_profile import MemberProfileModel
from membership.infrastructure.models.participant import EventParticipantModel

__all__ = [
    "EventModel",
    "EventParticipantModel",
    "MemberProfileModel",
]
