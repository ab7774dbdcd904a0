"""Bearer token verification. The identity produced here is the only thing
that scopes which credential rows a request may read."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.auth.identity_client import IdentityClient
from app.core.errors import UnauthorizedError

BEARER_PREFIX = "bearer"


@dataclass(frozen=True)
class UserIdentity:
    user_id: str


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise UnauthorizedError("Authorization header required")
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_PREFIX or not token:
        raise UnauthorizedError()
    return token


class AuthGate:
    def __init__(self, identity_client: IdentityClient) -> None:
        self._identity_client = identity_client

    def verify(self, authorization: Optional[str]) -> UserIdentity:
        """Verify the header and return the caller's identity.

        The identity provider is not contacted when no token is present.
        """
        token = extract_bearer_token(authorization)
        return UserIdentity(user_id=self._identity_client.get_user_id(token))
