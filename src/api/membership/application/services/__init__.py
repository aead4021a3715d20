"""Application services for the membership bounded context."""

from membership.application.services.identity_resolver import IdentityResolver
from membership.application.services.membership_service import MembershipService

__all__ = [
    "IdentityResolver",
    "MembershipService",
]
