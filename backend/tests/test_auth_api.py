"""
WordTally Backend — Account API Tests
======================================

What:  /auth endpoints end-to-end through the ASGI app on a temporary
       SQLite database.

What we test:
    ✅ Signup returns 201 with a token and the user profile
    ✅ Duplicate signup and bad credentials are 401
    ✅ Malformed bodies are 400 with the error envelope
    ✅ Verify accepts the token's own email and rejects any other
    ✅ Expired tokens, deleted accounts and missing headers are 401
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sqlalchemy import delete

from wordtally.config import settings
from wordtally.models.user import User


class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_returns_token_and_profile(self, test_client):
        response = await test_client.post(
            "/auth/signup",
            json={"displayName": "Ada", "email": "Ada@Example.com", "password": "correct-horse"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["token"]
        assert data["user"] == {"email": "ada@example.com", "displayName": "Ada"}

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, test_client, register):
        await register("ada@example.com")

        response = await test_client.post(
            "/auth/signup",
            json={"displayName": "Other", "email": "ADA@example.com", "password": "another-pass"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Account already exists"

    @pytest.mark.asyncio
    async def test_short_password_rejected(self, test_client):
        response = await test_client.post(
            "/auth/signup",
            json={"displayName": "Ada", "email": "ada@example.com", "password": "short"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "validation_error"
        assert data["details"]["errors"][0]["field"] == "password"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email",
        ["not-an-email", "ada@example.c", "a..b@x.com", "x@y.zzzzzz", "<b>@x.io", "ada@"],
    )
    async def test_invalid_email_rejected(self, test_client, email):
        response = await test_client.post(
            "/auth/signup",
            json={"displayName": "Ada", "email": email, "password": "correct-horse"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid email address"


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client, register):
        await register("ada@example.com", "correct-horse")

        response = await test_client.post(
            "/auth/login",
            json={"email": "ada@example.com", "password": "correct-horse"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["user"]["displayName"] == "ada"

    @pytest.mark.asyncio
    async def test_login_token_is_usable(self, test_client, register):
        await register("ada@example.com", "correct-horse")
        login = await test_client.post(
            "/auth/login",
            json={"email": "ada@example.com", "password": "correct-horse"},
        )
        headers = {"Authorization": f"Bearer {login.json()['token']}"}

        response = await test_client.get("/url/list/domains", headers=headers)

        assert response.status_code == 200
        assert response.json()["domains"] == []

    @pytest.mark.asyncio
    async def test_wrong_password(self, test_client, register):
        await register("ada@example.com", "correct-horse")

        response = await test_client.post(
            "/auth/login",
            json={"email": "ada@example.com", "password": "battery-staple"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_unknown_email_same_message(self, test_client):
        response = await test_client.post(
            "/auth/login",
            json={"email": "nobody@example.com", "password": "correct-horse"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


class TestVerify:

    @pytest.mark.asyncio
    async def test_matching_email(self, test_client, register):
        headers = await register("ada@example.com")

        response = await test_client.post(
            "/auth/verify", json={"email": "ADA@example.com"}, headers=headers
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}

    @pytest.mark.asyncio
    async def test_other_email_rejected(self, test_client, register):
        headers = await register("ada@example.com")
        await register("grace@example.com")

        response = await test_client.post(
            "/auth/verify", json={"email": "grace@example.com"}, headers=headers
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_email_body(self, test_client, register):
        headers = await register("ada@example.com")

        response = await test_client.post(
            "/auth/verify", json={"email": "nope"}, headers=headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_header(self, test_client):
        response = await test_client.post("/auth/verify", json={"email": "ada@example.com"})

        assert response.status_code == 401
        data = response.json()
        assert data["error"] == "unauthorized"
        assert data["request_id"]

    @pytest.mark.asyncio
    async def test_expired_token(self, test_client, register):
        await register("ada@example.com")
        past = datetime.now(timezone.utc) - timedelta(minutes=1)
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "iat": past - timedelta(hours=1), "exp": past},
            settings.token_secret,
            algorithm=settings.token_algorithm,
        )

        response = await test_client.post(
            "/auth/verify",
            json={"email": "ada@example.com"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    @pytest.mark.asyncio
    async def test_deleted_account(self, test_client, register, session_factory):
        headers = await register("ada@example.com")
        async with session_factory() as session:
            await session.execute(delete(User))
            await session.commit()

        response = await test_client.post(
            "/auth/verify", json={"email": "ada@example.com"}, headers=headers
        )

        assert response.status_code == 401
        assert response.json()["message"] == "User not found"
