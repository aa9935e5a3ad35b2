"""HTTP tests for /api/auth/*."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from httpx import AsyncClient

from crossfire.container import Services


class TestRegistration:
    async def test_register_success(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json={
            "username": "alice",
            "email": "Alice@Example.com",
            "password": "SecureP@ss1",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["user"]["username"] == "alice"
        assert data["user"]["email"] == "alice@example.com"
        assert len(data["token"]) == 64
        assert "expires_at" in data
        assert "password_hash" not in data["user"]

    async def test_weak_password_rejected(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json={
            "username": "alice",
            "email": "alice@example.com",
            "password": "weakpass",
        })
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    async def test_invalid_email_rejected(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json={
            "username": "alice",
            "email": "not-an-email",
            "password": "SecureP@ss1",
        })
        assert response.status_code == 422

    async def test_invalid_username_rejected(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json={
            "username": "al ice!",
            "email": "alice@example.com",
            "password": "SecureP@ss1",
        })
        assert response.status_code == 422

    async def test_duplicate_registration_is_generic_401(self, client: AsyncClient, registered_user: dict):
        response = await client.post("/api/auth/register", json={
            "username": "someone_else",
            "email": registered_user["email"],
            "password": "SecureP@ss1",
        })
        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid email or password", "code": "invalid_credentials"}


class TestLogin:
    async def test_login_success(self, client: AsyncClient, registered_user: dict):
        response = await client.post("/api/auth/login", json={
            "email": registered_user["email"],
            "password": registered_user["password"],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == registered_user["user_id"]
        assert data["user"]["last_login_at"] is not None
        assert data["token"] != registered_user["token"]

    async def test_wrong_password(self, client: AsyncClient, registered_user: dict):
        response = await client.post("/api/auth/login", json={
            "email": registered_user["email"],
            "password": "WrongP@ss1",
        })
        assert response.status_code == 401
        assert response.json()["code"] == "invalid_credentials"
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_unknown_email_same_response(self, client: AsyncClient, registered_user: dict):
        wrong = await client.post("/api/auth/login", json={
            "email": registered_user["email"],
            "password": "WrongP@ss1",
        })
        unknown = await client.post("/api/auth/login", json={
            "email": "nobody@example.com",
            "password": "WrongP@ss1",
        })
        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    async def test_banned_user_gets_403(self, client: AsyncClient, registered_user: dict, services: Services):
        until = datetime.now(timezone.utc) + timedelta(days=2)
        await services.auth.ban_user(registered_user["user_id"], reason="cheating", until=until)

        response = await client.post("/api/auth/login", json={
            "email": registered_user["email"],
            "password": registered_user["password"],
        })
        assert response.status_code == 403
        data = response.json()
        assert data["code"] == "user_banned"
        assert data["reason"] == "cheating"
        assert datetime.fromisoformat(data["until"]) == until


class TestSessionEndpoints:
    async def test_get_session(self, authed_client: AsyncClient, registered_user: dict):
        response = await authed_client.get("/api/auth/session")
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == registered_user["user_id"]
        assert data["session"]["id"]
        assert "token" not in data["session"]
        assert "token_hash" not in data["session"]

    async def test_missing_bearer_is_401(self, client: AsyncClient):
        response = await client.get("/api/auth/session")
        assert response.status_code == 401
        assert response.json()["code"] == "unauthorized"

    async def test_non_bearer_scheme_is_401(self, client: AsyncClient):
        response = await client.get("/api/auth/session", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401

    async def test_unknown_token_is_401(self, client: AsyncClient):
        response = await client.get("/api/auth/session", headers={"Authorization": f"Bearer {'0' * 64}"})
        assert response.status_code == 401
        assert response.json() == {"detail": "Unauthorized", "code": "unauthorized"}

    async def test_refresh_rotates(self, authed_client: AsyncClient, registered_user: dict):
        response = await authed_client.post("/api/auth/refresh")
        assert response.status_code == 200
        new_token = response.json()["token"]
        assert new_token != registered_user["token"]

        old = await authed_client.get("/api/auth/session")
        assert old.status_code == 401

        fresh = await authed_client.get("/api/auth/session", headers={"Authorization": f"Bearer {new_token}"})
        assert fresh.status_code == 200

    async def test_logout(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json() == {"message": "Logged out"}

        after = await authed_client.get("/api/auth/session")
        assert after.status_code == 401

    async def test_logout_is_idempotent(self, authed_client: AsyncClient):
        await authed_client.post("/api/auth/logout")
        again = await authed_client.post("/api/auth/logout")
        assert again.status_code == 200

    async def test_logout_unknown_token_succeeds(self, client: AsyncClient):
        response = await client.post("/api/auth/logout", headers={"Authorization": f"Bearer {'0' * 64}"})
        assert response.status_code == 200

    async def test_logout_all(self, client: AsyncClient, registered_user: dict):
        login = await client.post("/api/auth/login", json={
            "email": registered_user["email"],
            "password": registered_user["password"],
        })
        second_token = login.json()["token"]

        response = await client.post(
            "/api/auth/logout-all", headers={"Authorization": f"Bearer {second_token}"}
        )
        assert response.status_code == 200
        assert response.json()["revoked_count"] == 2

        for token in (registered_user["token"], second_token):
            check = await client.get("/api/auth/session", headers={"Authorization": f"Bearer {token}"})
            assert check.status_code == 401

    async def test_ban_invalidates_session(
        self, authed_client: AsyncClient, registered_user: dict, services: Services
    ):
        await services.auth.ban_user(registered_user["user_id"])
        response = await authed_client.get("/api/auth/session")
        assert response.status_code == 401
