"""Static game data lookups."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crossfire.db.models import GameMap, Weapon, WeaponAttachment
    from crossfire.static_data.store import StaticDataStore


class StaticDataService:
    """Catalogue of active weapons, attachments and maps."""

    def __init__(self, store: StaticDataStore) -> None:
        self._store = store

    async def get_weapons(self) -> Sequence[Weapon]:
        return await self._store.get_active_weapons()

    async def get_weapon_attachments_by_key(self, weapon_key: str) -> Sequence[WeaponAttachment]:
        """Active attachments of an active weapon. Unknown keys yield an empty list."""
        weapon = await self._store.get_weapon_by_key(weapon_key)
        if weapon is None:
            return []
        return await self._store.get_weapon_attachments(weapon.id)

    async def get_maps(self) -> Sequence[GameMap]:
        return await self._store.get_active_maps()
