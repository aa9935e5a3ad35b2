"""Default weapons and maps, inserted at startup if missing."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from crossfire.db.models import GameMap, Weapon
from crossfire.db.upsert import conflict_insert

logger = logging.getLogger(__name__)

WEAPON_SEED_DATA: list[dict] = [
    {
        "weapon_key": "ak47",
        "name": "AK-47",
        "description": "Reliable assault rifle with high damage",
        "weapon_type": "assault_rifle",
        "rarity": "common",
        "base_damage": 35,
        "unlock_level": 1,
    },
    {
        "weapon_key": "m4a1",
        "name": "M4A1",
        "description": "Accurate assault rifle with low recoil",
        "weapon_type": "assault_rifle",
        "rarity": "common",
        "base_damage": 30,
        "unlock_level": 1,
    },
    {
        "weapon_key": "awp",
        "name": "AWP",
        "description": "Bolt-action sniper rifle, one shot to the body",
        "weapon_type": "sniper",
        "rarity": "rare",
        "base_damage": 115,
        "unlock_level": 5,
    },
    {
        "weapon_key": "mp5",
        "name": "MP5",
        "description": "Fast-firing submachine gun for close quarters",
        "weapon_type": "smg",
        "rarity": "common",
        "base_damage": 25,
        "unlock_level": 1,
    },
    {
        "weapon_key": "desert_eagle",
        "name": "Desert Eagle",
        "description": "Heavy pistol",
        "weapon_type": "pistol",
        "rarity": "common",
        "base_damage": 55,
        "unlock_level": 1,
    },
]

MAP_SEED_DATA: list[dict] = [
    {
        "map_key": "desert_storm",
        "name": "Desert Storm",
        "description": "Open desert town with long sightlines",
        "max_players": 16,
        "supported_modes": ["team_deathmatch", "free_for_all"],
        "size_category": "medium",
    },
    {
        "map_key": "black_widow",
        "name": "Black Widow",
        "description": "Tight industrial corridors",
        "max_players": 10,
        "supported_modes": ["search_destroy", "elimination"],
        "size_category": "small",
    },
    {
        "map_key": "eagle_eye",
        "name": "Eagle Eye",
        "description": "Mountain base with sniper perches",
        "max_players": 16,
        "supported_modes": ["team_deathmatch", "search_destroy"],
        "size_category": "large",
    },
    {
        "map_key": "factory",
        "name": "Factory",
        "description": "Compact factory floor",
        "max_players": 12,
        "supported_modes": ["team_deathmatch", "free_for_all", "search_destroy"],
        "size_category": "medium",
    },
]


async def seed_static_data(db: AsyncSession) -> int:
    """Insert default weapons and maps. Existing keys are left untouched.

    Returns the number of rows inserted.
    """
    insert = conflict_insert(db)
    inserted = 0

    for weapon_data in WEAPON_SEED_DATA:
        stmt = insert(Weapon).values(**weapon_data).on_conflict_do_nothing(index_elements=["weapon_key"])
        result = await db.execute(stmt)
        inserted += result.rowcount or 0

    for map_data in MAP_SEED_DATA:
        stmt = insert(GameMap).values(**map_data).on_conflict_do_nothing(index_elements=["map_key"])
        result = await db.execute(stmt)
        inserted += result.rowcount or 0

    await db.commit()
    logger.info("Seeded %d static data rows", inserted)
    return inserted
