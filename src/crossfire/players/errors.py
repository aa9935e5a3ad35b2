"""Player domain errors."""

from __future__ import annotations

from typing import Any


class PlayerError(Exception):
    """Base class for player profile failures."""

    code: str = "player_error"
    message: str = "Player error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class PlayerNotFoundError(PlayerError):
    code = "player_not_found"
    message = "Player not found"

    def __init__(self, player_id: str | None = None) -> None:
        self.player_id = player_id
        super().__init__()


class PlayerAlreadyExistsError(PlayerError):
    code = "player_already_exists"
    message = "Player profile already exists"
