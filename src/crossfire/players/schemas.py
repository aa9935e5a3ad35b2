"""Request/response schemas for player profile endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CreatePlayerRequest(BaseModel):
    """Create the caller's player profile."""

    display_name: str = Field(..., min_length=3, max_length=64)
    region: str | None = Field(None, min_length=1, max_length=16)
    language: str | None = Field(None, min_length=2, max_length=8)


class UpdatePlayerRequest(BaseModel):
    """Partial profile update. Omitted or null fields are left unchanged."""

    display_name: str | None = Field(None, min_length=3, max_length=64)
    avatar_url: str | None = Field(None, min_length=1, max_length=512)
    bio: str | None = Field(None, min_length=1, max_length=500)
    region: str | None = Field(None, min_length=1, max_length=16)
    language: str | None = Field(None, min_length=2, max_length=8)


class PlayerResponse(BaseModel):
    id: str
    user_id: str
    display_name: str
    avatar_url: str | None = None
    bio: str | None = None
    region: str
    language: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StatsResponse(BaseModel):
    """Lifetime match totals."""

    player_id: str
    total_matches: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    total_kills: int = 0
    total_deaths: int = 0
    total_assists: int = 0
    total_headshots: int = 0
    total_damage_dealt: int = 0
    total_damage_received: int = 0
    total_score: int = 0
    playtime_seconds: int = 0
    last_updated: datetime | None = None

    model_config = {"from_attributes": True}


class ProgressionResponse(BaseModel):
    """Level and XP, with the rank title and the next titled threshold."""

    player_id: str
    current_level: int
    current_xp: int
    total_xp: int
    xp_multiplier: float
    xp_booster_expires: datetime | None = None
    level_title: str
    next_level: int
    next_level_title: str
    next_level_xp: int


class PlayerEnvelope(BaseModel):
    player: PlayerResponse


class StatsEnvelope(BaseModel):
    stats: StatsResponse


class ProgressionEnvelope(BaseModel):
    progression: ProgressionResponse
