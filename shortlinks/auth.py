"""Caller identity resolution.

Users sign in with an external identity provider, which issues signed
tokens. This service only verifies them and reads the subject.
"""

import logging
from typing import Optional, Protocol, Sequence

from jose import JWTError, jwt


class IdentityProvider(Protocol):
    """Resolves a caller credential to an owner id."""

    async def resolve(self, token: Optional[str]) -> Optional[str]:
        ...


class JWTIdentityProvider:
    """Verify identity-provider JWTs and return their ``sub`` claim."""

    def __init__(
        self,
        secret: str,
        algorithms: Sequence[str] = ("HS256",),
        audience: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.secret = secret
        self.algorithms = list(algorithms)
        self.audience = audience
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, token: Optional[str]) -> Optional[str]:
        """Return the owner id for a token, or None if it is missing or invalid."""
        if not token or not self.secret:
            return None

        options = {"verify_aud": self.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=self.algorithms,
                audience=self.audience,
                options=options,
            )
        except JWTError as e:
            self.logger.debug(f"Rejected token: {e}")
            return None

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            return None
        return subject


def extract_token(authorization: Optional[str], cookie_token: Optional[str] = None) -> Optional[str]:
    """Pick the caller token from an ``Authorization: Bearer`` header or a session cookie."""
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return cookie_token or None
