"""Tests for the authentication endpoints."""

import pytest

from tests.helpers import TEST_PASSWORD


async def login(client, email, password=TEST_PASSWORD):
    return await client.post("/api/auth/login", json={"email": email, "password": password})


class TestLogin:
    """Test POST /api/auth/login."""

    @pytest.mark.asyncio
    async def test_login_sets_session_cookie(self, client, make_user, store):
        user = make_user("support", email="agent@example.com")

        response = await login(client, "Agent@Example.com")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["id"] == user.id
        assert body["data"]["role"]["name"] == "support"
        assert {"resource": "orders", "action": "READ", "scope": "ALL"} in body["data"]["permissions"]
        assert "password_hash" not in body["data"]

        token = response.cookies.get("session_token")
        assert token in store.sessions
        header = response.headers["set-cookie"].lower()
        assert "httponly" in header
        assert "samesite=lax" in header

    @pytest.mark.asyncio
    async def test_wrong_password(self, client, make_user, store):
        make_user("support", email="agent@example.com")

        response = await login(client, "agent@example.com", "not-the-password")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"
        assert response.json()["error"]["message"] == "Invalid email or password"
        assert store.sessions == {}

    @pytest.mark.asyncio
    async def test_unknown_email_looks_like_wrong_password(self, client, roles):
        response = await login(client, "nobody@example.com")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_missing_fields(self, client, roles):
        response = await client.post("/api/auth/login", json={"email": "agent@example.com"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_disabled_account(self, client, make_user):
        make_user("support", email="agent@example.com", is_active=False)

        response = await login(client, "agent@example.com")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Account is disabled"


class TestRegister:
    """Test POST /api/auth/register."""

    @pytest.mark.asyncio
    async def test_register_signs_in_with_default_role(self, client, roles):
        response = await client.post("/api/auth/register", json={
            "email": "New.Customer@example.com",
            "password": "long-enough",
            "first_name": "New",
            "last_name": "Customer",
            "phone": "+84912345678",
        })

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["email"] == "new.customer@example.com"
        assert data["phone"] == "0912345678"
        assert data["role"]["name"] == "customer"
        assert data["permissions"] == []

        me = await client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["data"]["id"] == data["id"]

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client, make_user):
        make_user("customer", email="taken@example.com")

        response = await client.post("/api/auth/register", json={
            "email": "taken@example.com", "password": "long-enough",
        })

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "RESOURCE_CONFLICT"
        assert error["details"]["errors"][0]["field"] == "email"

    @pytest.mark.asyncio
    async def test_short_password(self, client, roles):
        response = await client.post("/api/auth/register", json={
            "email": "new@example.com", "password": "short",
        })

        assert response.status_code == 400
        assert response.json()["error"]["details"]["errors"] == [
            {"field": "password", "message": "Password must be at least 8 characters"}
        ]

    @pytest.mark.asyncio
    async def test_invalid_phone(self, client, roles):
        response = await client.post("/api/auth/register", json={
            "email": "new@example.com", "password": "long-enough", "phone": "12345",
        })

        assert response.status_code == 400
        assert response.json()["error"]["details"]["errors"][0]["field"] == "phone"


class TestSessionEndpoints:
    """Test /api/auth/me and /api/auth/logout."""

    @pytest.mark.asyncio
    async def test_me_without_session(self, client, roles):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    @pytest.mark.asyncio
    async def test_logout(self, client, make_user, store):
        make_user("support", email="agent@example.com")
        await login(client, "agent@example.com")

        response = await client.post("/api/auth/logout")

        assert response.status_code == 200
        assert store.sessions == {}
        assert (await client.get("/api/auth/me")).status_code == 401

        # logging out twice is harmless
        assert (await client.post("/api/auth/logout")).status_code == 200

    @pytest.mark.asyncio
    async def test_expired_session(self, client, make_user, clock, store):
        make_user("support", email="agent@example.com")
        await login(client, "agent@example.com")

        clock.advance(days=8)

        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert store.sessions == {}
        header = response.headers["set-cookie"].lower()
        assert header.startswith("session_token=")
        assert "max-age=0" in header
