"""
WordTally Backend — Account Request/Response Schemas
=====================================================

What:  Pydantic models for /auth/signup, /auth/login and /auth/verify.
Why:   Declarative validation at the boundary: a bad email or a short
       password never reaches AuthService.
How:   JSON uses camelCase (`displayName`); Python code uses snake_case via
       field aliases. FastAPI serializes responses by alias.

Email rules:
    Syntax is checked by pydantic's EmailStr (email-validator). On top of
    that the last domain label must be 2-3 word characters, which is what
    existing clients have always been held to. Every failure reports the
    same "Invalid email address" message.
"""

import re
from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, ValidationError, WrapValidator

INVALID_EMAIL = "Invalid email address"

TOP_LEVEL_LABEL = re.compile(r"^\w{2,3}$")

PASSWORD_MIN_LENGTH = 8


def _email_or_invalid(value, handler) -> str:
    try:
        email = handler(value)
    except ValidationError:
        raise ValueError(INVALID_EMAIL)
    if not TOP_LEVEL_LABEL.match(email.rsplit(".", 1)[-1]):
        raise ValueError(INVALID_EMAIL)
    return email


Email = Annotated[EmailStr, WrapValidator(_email_or_invalid)]


class EmailBody(BaseModel):
    """Body of POST /auth/verify."""
    email: Email


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)


class SignupRequest(LoginRequest):
    display_name: str = Field(alias="displayName", min_length=1, max_length=100)

    model_config = {"populate_by_name": True}


class UserOut(BaseModel):
    """Public view of an account; never includes the password hash."""
    email: str
    display_name: str = Field(alias="displayName")

    model_config = {"populate_by_name": True}


class AuthResponse(BaseModel):
    """
    Returned by signup (201) and login (200).

    The token goes in `Authorization: Bearer <token>` on every /url call.
    """
    success: bool = Field(default=True)
    token: str = Field(description="Signed bearer token")
    user: UserOut
