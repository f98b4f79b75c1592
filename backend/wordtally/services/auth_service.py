"""
WordTally Backend — Account Service
====================================

What:  Signup, login and token/email verification.
Why:   The URL endpoints only accept bearer tokens; this service is where
       those tokens come from.
How:   Passwords are hashed with bcrypt in a worker thread (the hash is
       deliberately slow and would otherwise stall the event loop). Tokens
       are issued by the identity verifier.

Error Handling Strategy:
    Unknown email and wrong password raise the same AuthError message so the
    login endpoint cannot be used to discover which emails have accounts.
"""

import asyncio
import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wordtally.config import settings
from wordtally.exceptions import AuthError, DatabaseError
from wordtally.models.user import User
from wordtally.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserOut
from wordtally.services.identity import IdentityVerifier, identity_verifier

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72

INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8")[:BCRYPT_MAX_BYTES], salt).decode("ascii")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(
        password.encode("utf-8")[:BCRYPT_MAX_BYTES],
        password_hash.encode("ascii"),
    )


class AuthService:
    """Account operations behind /auth."""

    def __init__(self, verifier: IdentityVerifier = identity_verifier):
        self.verifier = verifier

    def _auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            token=self.verifier.issue(user.id),
            user=UserOut(email=user.email, display_name=user.display_name),
        )

    async def _find_by_email(self, db: AsyncSession, email: str):
        try:
            result = await db.execute(select(User).where(User.email == email.lower()))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up account: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def signup(self, db: AsyncSession, data: SignupRequest) -> AuthResponse:
        """
        Create an account and return a token for it.

        Raises:
            AuthError: An account with this email already exists (→ 401)
            DatabaseError: Insert failed (→ 500)
        """
        email = data.email.lower()
        if await self._find_by_email(db, email) is not None:
            raise AuthError(message="Account already exists")

        password_hash = await asyncio.to_thread(hash_password, data.password)
        user = User(email=email, display_name=data.display_name, password_hash=password_hash)

        try:
            db.add(user)
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            raise AuthError(message="Account already exists")
        except SQLAlchemyError as e:
            logger.error("Database error creating account: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Account created: %s", user.id)
        return self._auth_response(user)

    async def login(self, db: AsyncSession, data: LoginRequest) -> AuthResponse:
        """
        Exchange email + password for a token.

        Raises:
            AuthError: No account or wrong password (→ 401)
        """
        user = await self._find_by_email(db, data.email)
        if user is None:
            raise AuthError(message=INVALID_CREDENTIALS)

        matches = await asyncio.to_thread(check_password, data.password, user.password_hash)
        if not matches:
            logger.info("Failed login for account %s", user.id)
            raise AuthError(message=INVALID_CREDENTIALS)

        return self._auth_response(user)

    def verify_email(self, user: User, email: str) -> None:
        """Confirm the token's account is the one registered under `email`."""
        if user.email.lower() != email.lower():
            raise AuthError(message="Unauthorized")


auth_service = AuthService()
