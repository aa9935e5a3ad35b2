"""Player profile router: /api/players/me endpoints.

Every route requires a valid bearer session; the profile is always the
caller's own.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from crossfire.auth.dependencies import get_current_user
from crossfire.db.models import PlayerProgression, User
from crossfire.dependencies import get_player_service
from crossfire.players.level_thresholds import level_info
from crossfire.players.schemas import (
    CreatePlayerRequest,
    PlayerEnvelope,
    PlayerResponse,
    ProgressionEnvelope,
    ProgressionResponse,
    StatsEnvelope,
    StatsResponse,
    UpdatePlayerRequest,
)
from crossfire.players.service import PlayerService

router = APIRouter(prefix="/api/players", tags=["Players"])


def _progression_response(progression: PlayerProgression) -> ProgressionResponse:
    info = level_info(progression.current_level)
    return ProgressionResponse(
        player_id=progression.player_id,
        current_level=progression.current_level,
        current_xp=progression.current_xp,
        total_xp=progression.total_xp,
        xp_multiplier=float(progression.xp_multiplier),
        xp_booster_expires=progression.xp_booster_expires,
        level_title=info["title"],
        next_level=info["next_level"],
        next_level_title=info["next_title"],
        next_level_xp=info["next_level_xp"],
    )


@router.post("/me", response_model=PlayerEnvelope, status_code=201)
async def create_player(
    body: CreatePlayerRequest,
    user: User = Depends(get_current_user),
    players: PlayerService = Depends(get_player_service),
) -> PlayerEnvelope:
    """Create the caller's profile with zeroed stats and level 1 progression."""
    player = await players.create_profile(
        user.id,
        body.display_name,
        region=body.region,
        language=body.language,
    )
    return PlayerEnvelope(player=PlayerResponse.model_validate(player))


@router.get("/me", response_model=PlayerEnvelope)
async def get_player(
    user: User = Depends(get_current_user),
    players: PlayerService = Depends(get_player_service),
) -> PlayerEnvelope:
    player = await players.get_profile_by_user_id(user.id)
    return PlayerEnvelope(player=PlayerResponse.model_validate(player))


@router.patch("/me", response_model=PlayerEnvelope)
async def update_player(
    body: UpdatePlayerRequest,
    user: User = Depends(get_current_user),
    players: PlayerService = Depends(get_player_service),
) -> PlayerEnvelope:
    player = await players.update_profile(
        user.id,
        display_name=body.display_name,
        avatar_url=body.avatar_url,
        bio=body.bio,
        region=body.region,
        language=body.language,
    )
    return PlayerEnvelope(player=PlayerResponse.model_validate(player))


@router.get("/me/stats", response_model=StatsEnvelope)
async def get_stats(
    user: User = Depends(get_current_user),
    players: PlayerService = Depends(get_player_service),
) -> StatsEnvelope:
    stats = await players.get_stats_by_user_id(user.id)
    return StatsEnvelope(stats=StatsResponse.model_validate(stats))


@router.get("/me/progression", response_model=ProgressionEnvelope)
async def get_progression(
    user: User = Depends(get_current_user),
    players: PlayerService = Depends(get_player_service),
) -> ProgressionEnvelope:
    progression = await players.get_progression_by_user_id(user.id)
    return ProgressionEnvelope(progression=_progression_response(progression))
