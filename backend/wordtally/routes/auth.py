"""
WordTally Backend — Account Route Handlers
===========================================

What:  POST /auth/signup, POST /auth/login, POST /auth/verify.
How:   Bodies are validated by the schemas (bad email → 400), then the work
       is delegated to AuthService. Errors surface through the global
       handlers in main.py.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wordtally.database import get_db_session
from wordtally.dependencies import get_current_user
from wordtally.models.user import User
from wordtally.schemas.auth import AuthResponse, EmailBody, LoginRequest, SignupRequest
from wordtally.schemas.common import ErrorResponse, SuccessResponse
from wordtally.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    status_code=201,
    response_model=AuthResponse,
    responses={
        400: {"description": "Invalid email or password too short", "model": ErrorResponse},
        401: {"description": "Account already exists", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await auth_service.signup(db, body)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        401: {"description": "No account or wrong password", "model": ErrorResponse},
    },
    summary="Exchange email and password for a bearer token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await auth_service.login(db, body)


@router.post(
    "/verify",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Invalid email address", "model": ErrorResponse},
        401: {"description": "Token invalid or issued for another email", "model": ErrorResponse},
    },
    summary="Check that a token belongs to the given email",
)
async def verify(
    body: EmailBody,
    user: User = Depends(get_current_user),
) -> SuccessResponse:
    """
    Used by the frontend on page load to confirm a stored token still
    matches the signed-in email.
    """
    auth_service.verify_email(user, body.email)
    return SuccessResponse()
