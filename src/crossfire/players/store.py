"""
Player profile persistence.

Plain CRUD over ``players`` keyed by user or player id, plus create-if-absent
for the one-to-one ``player_stats`` and ``player_progression`` rows. The
latter use the database's atomic ``INSERT ... ON CONFLICT DO NOTHING``
followed by a read, so racing first accesses converge on a single row.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from crossfire.db.models import Player, PlayerProgression, PlayerStats
from crossfire.db.upsert import conflict_insert
from crossfire.players.errors import PlayerAlreadyExistsError, PlayerNotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = structlog.get_logger()

DEFAULT_REGION = "ASIA"
DEFAULT_LANGUAGE = "en"

UPDATABLE_FIELDS = frozenset({"display_name", "avatar_url", "bio", "region", "language"})


def _is_user_id_conflict(exc: IntegrityError) -> bool:
    """True for the ``players.user_id`` unique violation, not FK or other failures."""
    # PostgreSQL names the constraint; SQLite names the column.
    message = str(exc.orig).lower()
    return "uq_players_user_id" in message or "players.user_id" in message


class PlayerStore:
    """Store for ``players``, ``player_stats`` and ``player_progression``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    # -----------------------------------------------------------------------
    # Players
    # -----------------------------------------------------------------------

    async def find_by_user_id(self, user_id: str) -> Player | None:
        async with self._session_factory() as db:
            result = await db.execute(select(Player).where(Player.user_id == user_id))
            return result.scalar_one_or_none()

    async def find_by_id(self, player_id: str) -> Player | None:
        async with self._session_factory() as db:
            return await db.get(Player, player_id)

    async def create(
        self,
        user_id: str,
        display_name: str,
        region: str | None = None,
        language: str | None = None,
    ) -> Player:
        """
        Insert a profile for ``user_id``.

        Raises:
            PlayerAlreadyExistsError: If the user already has a profile.
            IntegrityError: For any other constraint failure, such as an
                unknown ``user_id``.
        """
        if await self.find_by_user_id(user_id) is not None:
            raise PlayerAlreadyExistsError

        now = datetime.now(timezone.utc)
        player = Player(
            user_id=user_id,
            display_name=display_name,
            region=region or DEFAULT_REGION,
            language=language or DEFAULT_LANGUAGE,
            created_at=now,
            updated_at=now,
        )
        async with self._session_factory() as db:
            db.add(player)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                if _is_user_id_conflict(e):
                    raise PlayerAlreadyExistsError from e
                raise
        return player

    async def update(self, player_id: str, changes: Mapping[str, Any]) -> Player:
        """
        Apply ``changes`` to a profile; keys not present are left untouched.

        Raises:
            PlayerNotFoundError: If no player has ``player_id``.
            ValueError: If ``changes`` names a field that cannot be updated.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            msg = f"Cannot update player fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        async with self._session_factory() as db:
            player = await db.get(Player, player_id)
            if player is None:
                raise PlayerNotFoundError(player_id)
            for field, value in changes.items():
                setattr(player, field, value)
            player.updated_at = datetime.now(timezone.utc)
            await db.commit()
            return player

    # -----------------------------------------------------------------------
    # Stats / progression
    # -----------------------------------------------------------------------

    async def get_stats(self, player_id: str) -> PlayerStats | None:
        async with self._session_factory() as db:
            return await db.get(PlayerStats, player_id)

    async def get_progression(self, player_id: str) -> PlayerProgression | None:
        async with self._session_factory() as db:
            return await db.get(PlayerProgression, player_id)

    async def create_stats(self, player_id: str) -> PlayerStats:
        """Create the zeroed stats row if absent, then return the stored row."""
        return await self._create_if_absent(PlayerStats, player_id)

    async def create_progression(self, player_id: str) -> PlayerProgression:
        """Create the level-1 progression row if absent, then return the stored row."""
        return await self._create_if_absent(PlayerProgression, player_id)

    async def _create_if_absent(self, model: type[Any], player_id: str) -> Any:  # noqa: ANN401
        async with self._session_factory() as db:
            insert = conflict_insert(db)
            stmt = (
                insert(model)
                .values(player_id=player_id, last_updated=datetime.now(timezone.utc))
                .on_conflict_do_nothing(index_elements=["player_id"])
            )
            result = await db.execute(stmt)
            await db.commit()
            if result.rowcount:
                logger.info("player_row_created", table=model.__tablename__, player_id=player_id)

            row = (await db.execute(select(model).where(model.player_id == player_id))).scalar_one()
            return row
