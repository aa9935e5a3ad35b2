"""Registration conflicts when the service is configured to name the field."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from crossfire.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        argon2_time_cost=1,
        argon2_memory_cost=1024,
        argon2_parallelism=1,
        register_reveals_conflict=True,
    )


class TestRevealedConflict:
    async def test_duplicate_email_is_409(self, client: AsyncClient, register):
        await register()
        response = await client.post("/api/auth/register", json={
            "username": "alice2",
            "email": "alice@example.com",
            "password": "SecureP@ss1",
        })
        assert response.status_code == 409
        assert response.json() == {
            "detail": "email already registered",
            "code": "user_already_exists",
            "field": "email",
        }

    async def test_duplicate_username_is_409(self, client: AsyncClient, register):
        await register()
        response = await client.post("/api/auth/register", json={
            "username": "alice",
            "email": "other@example.com",
            "password": "SecureP@ss1",
        })
        assert response.status_code == 409
        assert response.json()["field"] == "username"
