"""Session source port.

A session source turns the opaque session id presented by a client (an
access token issued by the hosted auth provider) into the identity data
attached to it. Implementations only read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class SessionIdentity:
    """Identity data attached to an authenticated session.

    Attributes:
        subject_id: Stable subject id of the authenticated identity
        email: Email address, if the provider supplied one
        metadata: Profile metadata attached by the identity provider, or
            None when the session carries none
    """

    subject_id: str
    email: str | None = None
    metadata: dict[str, Any] | None = field(default=None)


@runtime_checkable
class ISessionSource(Protocol):
    """Resolves session ids to session identities."""

    async def get_session(self, session_id: str) -> SessionIdentity:
        """Return the identity attached to a session.

        Args:
            session_id: Opaque session id (bearer access token)

        Returns:
            The session's identity data

        Raises:
            InvalidSessionError: If the session is unknown, invalid or expired
        """
        ...
