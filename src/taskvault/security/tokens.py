"""
Signed session tokens for TaskVault
Stateless HS256 JWTs carrying the user's id and email.
"""
from __future__ import annotations

import time
from datetime import timedelta

import jwt as pyjwt
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..config import MIN_JWT_SECRET_LENGTH
from ..utils.errors import ConfigurationError, UnauthorizedError

SESSION_TTL = timedelta(days=7)
TOKEN_ALGORITHM = "HS256"


class SessionIdentity(BaseModel):
    """The authenticated user behind a request."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    user_id: str
    email: str


class TokenService:
    """Issues and verifies session tokens signed with a shared secret."""

    def __init__(self, secret: str, ttl: timedelta = SESSION_TTL):
        if len(secret) < MIN_JWT_SECRET_LENGTH:
            raise ConfigurationError(
                f"Token secret must be at least {MIN_JWT_SECRET_LENGTH} characters"
            )
        self._secret = secret
        self.ttl = ttl

    def issue(self, identity: SessionIdentity) -> str:
        now = int(time.time())
        payload = {
            "userId": identity.user_id,
            "email": identity.email,
            "iat": now,
            "exp": now + int(self.ttl.total_seconds()),
        }
        return pyjwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str) -> SessionIdentity:
        """
        Decode and validate a session token.

        Raises:
            UnauthorizedError: For any invalid token. The reason (bad signature,
                expiry, malformed structure, missing claims) is not exposed.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "userId", "email"]},
            )
        except pyjwt.PyJWTError as e:
            raise UnauthorizedError() from e

        user_id, email = payload["userId"], payload["email"]
        if not isinstance(user_id, str) or not isinstance(email, str):
            raise UnauthorizedError()
        return SessionIdentity(user_id=user_id, email=email)
