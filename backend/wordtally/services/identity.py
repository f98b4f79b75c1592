"""
WordTally Backend — Identity Verifier
======================================

What:  Issues and verifies the bearer tokens that identify a user.
Why:   Every /url endpoint needs a stable user id. The verifier turns the
       credential into that id; the auth guard then checks that the id still
       belongs to an existing account.
How:   Tokens are HS256 JWTs (PyJWT) signed with TOKEN_SECRET. The subject
       claim (`sub`) holds the user's UUID; `exp` bounds the token lifetime.

Design Decision:
    An abstract base keeps the guard independent of the token format. An
    external identity provider (one that verifies ID tokens against its own
    keys) fits behind the same `verify()` contract.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from wordtally.config import settings
from wordtally.exceptions import AuthError

logger = logging.getLogger(__name__)


class IdentityVerifier(ABC):
    """
    Contract:
        - verify() returns the user id for a valid credential
        - an invalid, expired or tampered credential raises AuthError
    """

    @abstractmethod
    def issue(self, user_id: uuid.UUID) -> str:
        """Create a credential for `user_id`."""
        ...

    @abstractmethod
    def verify(self, token: str) -> uuid.UUID:
        """Return the user id carried by `token` or raise AuthError."""
        ...


class JwtIdentityVerifier(IdentityVerifier):
    """Self-issued signed tokens with an embedded subject id."""

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
    ):
        self.secret = secret or settings.token_secret
        self.algorithm = algorithm or settings.token_algorithm
        self.expire_minutes = expire_minutes or settings.token_expire_minutes

    def issue(self, user_id: uuid.UUID) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthError(message="Token has expired")
        except jwt.InvalidTokenError as e:
            # Never log the token itself
            logger.info("Rejected bearer token: %s", type(e).__name__)
            raise AuthError(message="Invalid token")

        try:
            return uuid.UUID(payload["sub"])
        except (TypeError, ValueError):
            raise AuthError(message="Invalid token")


identity_verifier = JwtIdentityVerifier()
