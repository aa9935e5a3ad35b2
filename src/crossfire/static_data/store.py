"""Read-only queries over weapons, weapon attachments and maps."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from sqlalchemy import select

from crossfire.db.models import GameMap, Weapon, WeaponAttachment

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class StaticDataStore:
    """Store for the static game catalogue tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_active_weapons(self) -> Sequence[Weapon]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Weapon)
                .where(Weapon.is_active.is_(True))
                .order_by(Weapon.unlock_level.asc(), Weapon.name.asc())
            )
            return result.scalars().all()

    async def get_weapon_by_key(self, weapon_key: str) -> Weapon | None:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Weapon).where(Weapon.weapon_key == weapon_key).where(Weapon.is_active.is_(True))
            )
            return result.scalar_one_or_none()

    async def get_weapon_attachments(self, weapon_id: str) -> Sequence[WeaponAttachment]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(WeaponAttachment)
                .where(WeaponAttachment.weapon_id == weapon_id)
                .where(WeaponAttachment.is_active.is_(True))
                .order_by(WeaponAttachment.unlock_level.asc(), WeaponAttachment.name.asc())
            )
            return result.scalars().all()

    async def get_active_maps(self) -> Sequence[GameMap]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(GameMap).where(GameMap.is_active.is_(True)).order_by(GameMap.name.asc())
            )
            return result.scalars().all()
