"""Response schemas for static game data."""

from __future__ import annotations

from pydantic import BaseModel


class WeaponResponse(BaseModel):
    id: str
    key: str
    name: str
    description: str | None = None
    type: str
    rarity: str
    base_damage: int
    unlock_level: int | None = None
    unlock_cost: int | None = None


class WeaponAttachmentResponse(BaseModel):
    id: str
    weapon_id: str | None = None
    attachment_type: str
    name: str
    unlock_level: int | None = None

    model_config = {"from_attributes": True}


class MapResponse(BaseModel):
    id: str
    key: str
    name: str
    description: str | None = None
    max_players: int
    supported_modes: list[str]
    size_category: str | None = None


class WeaponListResponse(BaseModel):
    weapons: list[WeaponResponse]


class WeaponAttachmentListResponse(BaseModel):
    attachments: list[WeaponAttachmentResponse]


class MapListResponse(BaseModel):
    maps: list[MapResponse]
