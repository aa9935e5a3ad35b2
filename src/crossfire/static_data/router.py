"""Static game data router: /api/static/* endpoints (public)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from crossfire.db.models import GameMap, Weapon
from crossfire.dependencies import get_static_data_service
from crossfire.static_data.schemas import (
    MapListResponse,
    MapResponse,
    WeaponAttachmentListResponse,
    WeaponAttachmentResponse,
    WeaponListResponse,
    WeaponResponse,
)
from crossfire.static_data.service import StaticDataService

router = APIRouter(prefix="/api/static", tags=["Static Data"])


def _weapon_response(weapon: Weapon) -> WeaponResponse:
    return WeaponResponse(
        id=weapon.id,
        key=weapon.weapon_key,
        name=weapon.name,
        description=weapon.description,
        type=weapon.weapon_type,
        rarity=weapon.rarity,
        base_damage=weapon.base_damage,
        unlock_level=weapon.unlock_level,
        unlock_cost=weapon.unlock_cost,
    )


def _map_response(game_map: GameMap) -> MapResponse:
    return MapResponse(
        id=game_map.id,
        key=game_map.map_key,
        name=game_map.name,
        description=game_map.description,
        max_players=game_map.max_players,
        supported_modes=list(game_map.supported_modes or []),
        size_category=game_map.size_category,
    )


@router.get("/weapons", response_model=WeaponListResponse)
async def list_weapons(
    static_data: StaticDataService = Depends(get_static_data_service),
) -> WeaponListResponse:
    """Active weapons, lowest unlock level first."""
    weapons = await static_data.get_weapons()
    return WeaponListResponse(weapons=[_weapon_response(w) for w in weapons])


@router.get("/weapons/{weapon_key}/attachments", response_model=WeaponAttachmentListResponse)
async def list_weapon_attachments(
    weapon_key: str,
    static_data: StaticDataService = Depends(get_static_data_service),
) -> WeaponAttachmentListResponse:
    """Active attachments for a weapon; an unknown key gives an empty list."""
    attachments = await static_data.get_weapon_attachments_by_key(weapon_key)
    return WeaponAttachmentListResponse(
        attachments=[WeaponAttachmentResponse.model_validate(a) for a in attachments]
    )


@router.get("/maps", response_model=MapListResponse)
async def list_maps(
    static_data: StaticDataService = Depends(get_static_data_service),
) -> MapListResponse:
    maps = await static_data.get_maps()
    return MapListResponse(maps=[_map_response(m) for m in maps])
