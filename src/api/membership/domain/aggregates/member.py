"""Member aggregate and the profile record it is projected from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from membership.domain.value_objects import MemberId, MemberSource

DEFAULT_DISPLAY_NAME = "Member"
DEFAULT_AGE = 25
DEFAULT_CITY = "Unknown"
DEFAULT_FAVORITE_SPORT = "none"
DEFAULT_IS_PREMIUM = False

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _age(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        age = int(value)
    except (TypeError, ValueError):
        return None
    return age if age > 0 else None


def _flag(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def _email_local_part(email: str | None) -> str | None:
    if not email:
        return None
    return _text(email.split("@", 1)[0])


@dataclass(frozen=True)
class MemberProfile:
    """Raw row of the durable member-profile store.

    Every field besides the id may be missing: rows written by older
    registration flows did not carry all of them.
    """

    id: MemberId
    email: str | None = None
    name: str | None = None
    age: int | None = None
    city: str | None = None
    favorite_sport: str | None = None
    avatar_url: str | None = None
    is_premium: bool | None = None

    def as_attributes(self) -> dict[str, Any]:
        """Return the profile fields keyed like session metadata."""
        return {
            "name": self.name,
            "age": self.age,
            "city": self.city,
            "favorite_sport": self.favorite_sport,
            "avatar_url": self.avatar_url,
            "is_premium": self.is_premium,
        }


@dataclass(frozen=True)
class Member:
    """Resolved identity and profile projection of a user.

    All display fields are filled (never None) so presentation code never
    branches on absence; only the avatar is optional. Members built from
    session metadata or as placeholders are transient and never persisted.
    """

    id: MemberId
    display_name: str
    age: int
    city: str
    favorite_sport: str
    is_premium: bool
    avatar_ref: str | None = None
    source: MemberSource = MemberSource.PROFILE

    @property
    def is_transient(self) -> bool:
        """Whether this member has no row in the durable profile store."""
        return self.source is not MemberSource.PROFILE

    @classmethod
    def from_attributes(
        cls,
        member_id: MemberId,
        attributes: Mapping[str, Any],
        email: str | None,
        source: MemberSource,
    ) -> Member:
        """Build a Member applying the single defaulting rule.

        Missing or unusable attributes fall back to: name -> local part of
        the email (then "Member"), age -> 25, city -> "Unknown",
        sport -> "none", premium -> False. The defaults are display
        fallbacks only and are never written back to any store.

        Args:
            member_id: Stable member identifier (session subject id)
            attributes: Profile row fields or session metadata
            email: Email address used for the display-name fallback
            source: Where the attributes came from
        """
        display_name = (
            _text(attributes.get("name"))
            or _email_local_part(email)
            or DEFAULT_DISPLAY_NAME
        )
        age = _age(attributes.get("age"))
        is_premium = _flag(attributes.get("is_premium"))

        return cls(
            id=member_id,
            display_name=display_name,
            age=age if age is not None else DEFAULT_AGE,
            city=_text(attributes.get("city")) or DEFAULT_CITY,
            favorite_sport=_text(attributes.get("favorite_sport"))
            or DEFAULT_FAVORITE_SPORT,
            is_premium=is_premium if is_premium is not None else DEFAULT_IS_PREMIUM,
            avatar_ref=_text(attributes.get("avatar_url")),
            source=source,
        )

    @classmethod
    def from_profile(
        cls, profile: MemberProfile, fallback_email: str | None = None
    ) -> Member:
        """Map a durable profile row to a Member."""
        return cls.from_attributes(
            member_id=profile.id,
            attributes=profile.as_attributes(),
            email=profile.email or fallback_email,
            source=MemberSource.PROFILE,
        )

    @classmethod
    def placeholder(cls, member_id: MemberId) -> Member:
        """Default-filled Member for an id with no profile row."""
        return cls.from_attributes(
            member_id=member_id,
            attributes={},
            email=None,
            source=MemberSource.PLACEHOLDER,
        )

    def __str__(self) -> str:
        """Return string representation."""
        return f"Member({self.display_name})"
