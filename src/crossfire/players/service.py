"""Player profile business logic."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from crossfire.players.errors import PlayerNotFoundError

if TYPE_CHECKING:
    from crossfire.db.models import Player, PlayerProgression, PlayerStats
    from crossfire.players.store import PlayerStore

logger = structlog.get_logger()


class PlayerService:
    """Profile creation, partial updates and lazy stats/progression access."""

    def __init__(self, store: PlayerStore) -> None:
        self._store = store

    async def create_profile(
        self,
        user_id: str,
        display_name: str,
        region: str | None = None,
        language: str | None = None,
    ) -> Player:
        """
        Create a profile and its stats and progression rows.

        The three writes are sequential rather than one transaction. If the
        process dies after the player insert, the stats/progression getters
        create the missing rows on first read.

        Raises:
            PlayerAlreadyExistsError: If the user already has a profile.
        """
        player = await self._store.create(user_id, display_name, region=region, language=language)
        await self._store.create_stats(player.id)
        await self._store.create_progression(player.id)
        logger.info("player_created", player_id=player.id, user_id=user_id)
        return player

    async def get_profile_by_user_id(self, user_id: str) -> Player:
        player = await self._store.find_by_user_id(user_id)
        if player is None:
            raise PlayerNotFoundError
        return player

    async def update_profile(
        self,
        user_id: str,
        display_name: str | None = None,
        avatar_url: str | None = None,
        bio: str | None = None,
        region: str | None = None,
        language: str | None = None,
    ) -> Player:
        """
        Update profile fields. Arguments left as None are not touched.

        Raises:
            PlayerNotFoundError: If the user has no profile.
        """
        player = await self.get_profile_by_user_id(user_id)
        supplied: dict[str, Any] = {
            "display_name": display_name,
            "avatar_url": avatar_url,
            "bio": bio,
            "region": region,
            "language": language,
        }
        changes = {field: value for field, value in supplied.items() if value is not None}
        player = await self._store.update(player.id, changes)
        logger.info("player_updated", player_id=player.id, fields=sorted(changes))
        return player

    async def get_stats_by_user_id(self, user_id: str) -> PlayerStats:
        """Stats for the user's player, created zeroed if missing."""
        player = await self.get_profile_by_user_id(user_id)
        stats = await self._store.get_stats(player.id)
        if stats is not None:
            return stats
        return await self._store.create_stats(player.id)

    async def get_progression_by_user_id(self, user_id: str) -> PlayerProgression:
        """Progression for the user's player, created at level 1 if missing."""
        player = await self.get_profile_by_user_id(user_id)
        progression = await self._store.get_progression(player.id)
        if progression is not None:
            return progression
        return await self._store.create_progression(player.id)
