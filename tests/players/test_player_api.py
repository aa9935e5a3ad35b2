"""HTTP tests for /api/players/me."""

from __future__ import annotations

from httpx import AsyncClient


class TestPlayerProfile:
    async def test_requires_auth(self, client: AsyncClient):
        for method, path in (
            ("POST", "/api/players/me"),
            ("GET", "/api/players/me"),
            ("PATCH", "/api/players/me"),
            ("GET", "/api/players/me/stats"),
            ("GET", "/api/players/me/progression"),
        ):
            response = await client.request(method, path, json={})
            assert response.status_code == 401, path

    async def test_create_profile(self, authed_client: AsyncClient, registered_user: dict):
        response = await authed_client.post("/api/players/me", json={"display_name": "Alice"})
        assert response.status_code == 201
        player = response.json()["player"]
        assert player["display_name"] == "Alice"
        assert player["user_id"] == registered_user["user_id"]
        assert player["region"] == "ASIA"
        assert player["language"] == "en"

    async def test_create_then_stats_are_zero(self, authed_client: AsyncClient):
        await authed_client.post("/api/players/me", json={"display_name": "Alice"})
        response = await authed_client.get("/api/players/me/stats")
        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["total_matches"] == 0
        assert stats["total_kills"] == 0
        assert stats["playtime_seconds"] == 0

    async def test_progression_has_level_title(self, authed_client: AsyncClient):
        await authed_client.post("/api/players/me", json={"display_name": "Alice"})
        response = await authed_client.get("/api/players/me/progression")
        assert response.status_code == 200
        progression = response.json()["progression"]
        assert progression["current_level"] == 1
        assert progression["total_xp"] == 0
        assert progression["xp_multiplier"] == 1.0
        assert progression["level_title"] == "Recruit"
        assert progression["next_level"] == 2
        assert progression["next_level_xp"] == 500

    async def test_duplicate_profile_409(self, authed_client: AsyncClient):
        await authed_client.post("/api/players/me", json={"display_name": "Alice"})
        response = await authed_client.post("/api/players/me", json={"display_name": "Alice"})
        assert response.status_code == 409
        assert response.json()["code"] == "player_already_exists"

    async def test_short_display_name_rejected(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/players/me", json={"display_name": "Al"})
        assert response.status_code == 422

    async def test_get_without_profile_404(self, authed_client: AsyncClient):
        response = await authed_client.get("/api/players/me")
        assert response.status_code == 404
        assert response.json() == {"detail": "Player not found", "code": "player_not_found"}

    async def test_stats_without_profile_404(self, authed_client: AsyncClient):
        response = await authed_client.get("/api/players/me/stats")
        assert response.status_code == 404

    async def test_get_profile(self, authed_client: AsyncClient):
        created = await authed_client.post("/api/players/me", json={"display_name": "Alice", "region": "EU"})
        response = await authed_client.get("/api/players/me")
        assert response.status_code == 200
        assert response.json()["player"]["id"] == created.json()["player"]["id"]
        assert response.json()["player"]["region"] == "EU"

    async def test_patch_partial_update(self, authed_client: AsyncClient):
        await authed_client.post("/api/players/me", json={"display_name": "Alice"})
        response = await authed_client.patch("/api/players/me", json={"bio": "Rifle main"})
        assert response.status_code == 200
        player = response.json()["player"]
        assert player["bio"] == "Rifle main"
        assert player["display_name"] == "Alice"

    async def test_patch_rejects_empty_bio(self, authed_client: AsyncClient):
        await authed_client.post("/api/players/me", json={"display_name": "Alice"})
        response = await authed_client.patch("/api/players/me", json={"bio": ""})
        assert response.status_code == 422

    async def test_patch_rejects_long_avatar_url(self, authed_client: AsyncClient):
        await authed_client.post("/api/players/me", json={"display_name": "Alice"})
        response = await authed_client.patch("/api/players/me", json={"avatar_url": "https://x.io/" + "a" * 600})
        assert response.status_code == 422

    async def test_patch_without_profile_404(self, authed_client: AsyncClient):
        response = await authed_client.patch("/api/players/me", json={"bio": "hi"})
        assert response.status_code == 404

    async def test_profiles_are_per_user(self, client: AsyncClient, register):
        alice = await register()
        bob = await register(username="bob", email="bob@example.com")

        await client.post(
            "/api/players/me",
            json={"display_name": "Alice"},
            headers={"Authorization": f"Bearer {alice['token']}"},
        )
        response = await client.get("/api/players/me", headers={"Authorization": f"Bearer {bob['token']}"})
        assert response.status_code == 404
