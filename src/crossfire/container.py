"""Wiring of stores and services.

Built once at startup and stored on ``app.state.services``. Tests build their
own with a test session factory and cheaper hashing parameters.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from crossfire.auth.password import PasswordHasher
from crossfire.auth.service import AuthService
from crossfire.auth.store import AuthStore
from crossfire.config import Settings
from crossfire.players.service import PlayerService
from crossfire.players.store import PlayerStore
from crossfire.static_data.service import StaticDataService
from crossfire.static_data.store import StaticDataStore


@dataclass(frozen=True)
class Services:
    auth: AuthService
    players: PlayerService
    static_data: StaticDataService


def build_services(session_factory: async_sessionmaker[AsyncSession], settings: Settings) -> Services:
    hasher = PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )
    return Services(
        auth=AuthService(
            AuthStore(session_factory),
            hasher,
            reveal_register_conflict=settings.register_reveals_conflict,
        ),
        players=PlayerService(PlayerStore(session_factory)),
        static_data=StaticDataService(StaticDataStore(session_factory)),
    )
