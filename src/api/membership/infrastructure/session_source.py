"""Session source backed by signed access tokens.

The hosted auth provider issues HMAC-signed JWT access tokens. The token
is the session id: verifying it yields the subject id, the email and the
user metadata the provider attached at sign-up.
"""

from __future__ import annotations

from typing import Any

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

from membership.infrastructure.observability import (
    DefaultSessionSourceProbe,
    SessionSourceProbe,
)
from membership.ports.exceptions import InvalidSessionError
from membership.ports.sessions import ISessionSource, SessionIdentity


class JWTSessionSource(ISessionSource):
    """Verifies access tokens with a shared secret.

    Validates signature, expiry, audience and (when configured) issuer.
    The user_metadata claim becomes the session metadata; any non-object
    value is treated as absent.
    """

    def __init__(
        self,
        secret: str,
        audience: str = "authenticated",
        issuer: str | None = None,
        algorithms: list[str] | None = None,
        probe: SessionSourceProbe | None = None,
        metadata_claim: str = "user_metadata",
    ):
        """Initialize the session source.

        Args:
            secret: HMAC secret shared with the auth provider
            audience: Expected audience claim value
            issuer: Expected issuer claim value, unchecked when None
            algorithms: Accepted signing algorithms (default: HS256)
            probe: Optional domain probe for observability
            metadata_claim: Claim holding provider-attached profile metadata

        Raises:
            ValueError: If secret is empty
        """
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._audience = audience
        self._issuer = issuer
        self._algorithms = algorithms or ["HS256"]
        self._probe = probe or DefaultSessionSourceProbe()
        self._metadata_claim = metadata_claim

    async def get_session(self, session_id: str) -> SessionIdentity:
        """Verify an access token and return its identity data.

        Raises:
            InvalidSessionError: If the token is malformed, expired or fails
                signature or claim verification
        """
        try:
            claims = jwt.decode(
                session_id,
                self._secret,
                algorithms=self._algorithms,
                audience=self._audience,
                issuer=self._issuer,
                options={"verify_iss": self._issuer is not None},
            )
        except ExpiredSignatureError as e:
            self._probe.session_rejected(reason="Token expired")
            raise InvalidSessionError("Session has expired") from e
        except JWTClaimsError as e:
            self._probe.session_rejected(reason=f"Claims error: {e}")
            raise InvalidSessionError(f"Invalid session claims: {e}") from e
        except JWTError as e:
            self._probe.session_rejected(reason=f"JWT error: {e}")
            raise InvalidSessionError(f"Invalid session: {e}") from e

        subject = claims.get("sub")
        if not subject:
            self._probe.session_rejected(reason="Missing sub claim")
            raise InvalidSessionError("Missing required claim: sub")

        email = claims.get("email")
        metadata = self._metadata(claims)

        self._probe.session_verified(
            subject_id=str(subject), has_metadata=metadata is not None
        )
        return SessionIdentity(
            subject_id=str(subject),
            email=str(email) if email else None,
            metadata=metadata,
        )

    def _metadata(self, claims: dict[str, Any]) -> dict[str, Any] | None:
        value = claims.get(self._metadata_claim)
        if isinstance(value, dict):
            return value
        return None
