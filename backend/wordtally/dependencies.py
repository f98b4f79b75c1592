"""
WordTally Backend — Authentication Guard
=========================================

What:  FastAPI dependencies that turn the Authorization header into a
       verified, still-existing user.
Who:   Every /url route and POST /auth/verify.
When:  Before the handler body runs; a failure here means the handler never
       executes and nothing is written.

Failure taxonomy:
    missing / short / non-Bearer header  → AuthError (401), no verification
    bad signature, expired token         → AuthError (401) from the verifier
    token for a deleted account          → AuthError (401) "User not found"
    anything else                        → 500 via the catch-all handler
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wordtally.database import get_db_session
from wordtally.exceptions import AuthError, DatabaseError
from wordtally.models.user import User
from wordtally.services.identity import identity_verifier

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "
MIN_HEADER_LENGTH = 8


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Strip the `Bearer ` scheme prefix, rejecting anything else."""
    if not authorization or len(authorization) < MIN_HEADER_LENGTH:
        raise AuthError(message="Missing or malformed Authorization header")
    if authorization[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        raise AuthError(message="Authorization header must use the Bearer scheme")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthError(message="Missing or malformed Authorization header")
    return token


async def get_current_user(
    authorization: Optional[str] = Header(
        default=None,
        description="Bearer token: `Bearer <token>`",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    token = extract_bearer_token(authorization)
    user_id = identity_verifier.verify(token)

    try:
        user = await db.get(User, user_id)
    except SQLAlchemyError as e:
        logger.error("Database error resolving token user: %s", str(e))
        raise DatabaseError(context={"error_type": type(e).__name__})

    if user is None:
        # Valid signature, but the account has been removed since issue
        raise AuthError(message="User not found")
    return user


async def get_current_user_id(user: User = Depends(get_current_user)) -> UUID:
    return user.id
