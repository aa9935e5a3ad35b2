"""Domain errors: codes, bodies and HTTP status mapping."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from crossfire.auth.errors import (
    AuthError,
    InvalidCredentialsError,
    UnauthorizedError,
    UserAlreadyExistsError,
    UserBannedError,
    UserNotFoundError,
)
from crossfire.middleware.error_handler import AUTH_ERROR_STATUS, PLAYER_ERROR_STATUS, setup_error_handlers
from crossfire.players.errors import PlayerAlreadyExistsError, PlayerError, PlayerNotFoundError


class TestErrorBodies:
    def test_invalid_credentials(self):
        assert InvalidCredentialsError().to_dict() == {
            "detail": "Invalid email or password",
            "code": "invalid_credentials",
        }

    def test_already_exists_names_field(self):
        body = UserAlreadyExistsError("username").to_dict()
        assert body["code"] == "user_already_exists"
        assert body["field"] == "username"

    def test_banned_carries_reason_and_until(self):
        until = datetime(2030, 1, 1, tzinfo=timezone.utc)
        body = UserBannedError(reason="cheating", until=until).to_dict()
        assert body["reason"] == "cheating"
        assert body["until"] == "2030-01-01T00:00:00+00:00"

    def test_permanent_ban_has_null_until(self):
        assert UserBannedError().to_dict()["until"] is None

    def test_custom_message(self):
        assert UnauthorizedError("Missing bearer token").message == "Missing bearer token"

    def test_player_not_found_keeps_id(self):
        err = PlayerNotFoundError("p1")
        assert err.player_id == "p1"
        assert err.to_dict() == {"detail": "Player not found", "code": "player_not_found"}


class TestStatusTables:
    def test_every_auth_error_is_mapped(self):
        assert set(AUTH_ERROR_STATUS) == set(AuthError.__subclasses__())

    def test_every_player_error_is_mapped(self):
        assert set(PLAYER_ERROR_STATUS) == set(PlayerError.__subclasses__())


def _app_raising(exc: Exception) -> FastAPI:
    app = FastAPI()
    setup_error_handlers(app)

    @app.get("/boom")
    async def boom() -> None:
        raise exc

    return app


@pytest.mark.parametrize(
    ("exc", "status", "code"),
    [
        (InvalidCredentialsError(), 401, "invalid_credentials"),
        (UnauthorizedError(), 401, "unauthorized"),
        (UserBannedError(), 403, "user_banned"),
        (UserNotFoundError(), 404, "user_not_found"),
        (UserAlreadyExistsError("email"), 409, "user_already_exists"),
        (PlayerNotFoundError(), 404, "player_not_found"),
        (PlayerAlreadyExistsError(), 409, "player_already_exists"),
    ],
)
async def test_domain_error_status(exc: Exception, status: int, code: str):
    transport = ASGITransport(app=_app_raising(exc))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")
    assert response.status_code == status
    assert response.json()["code"] == code


async def test_unexpected_error_is_opaque_500():
    transport = ASGITransport(app=_app_raising(RuntimeError("db exploded")), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
