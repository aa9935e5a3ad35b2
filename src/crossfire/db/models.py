"""ORM models for accounts, player profiles, and static game data.

Column layout follows the Alembic migrations in ``alembic/versions``.
Identifiers are UUID strings generated client-side so the same models run
on PostgreSQL and on the SQLite database used by the test suite.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    false,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crossfire.db.base import Base
from crossfire.db.types import UTCDateTime


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


class User(Base):
    """Maps to the 'users' table."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    username: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true())
    is_banned: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    banned_until: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    ban_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)
    last_login_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    sessions: Mapped[list[Session]] = relationship(
        "Session", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    player: Mapped[Player | None] = relationship(
        "Player", back_populates="user", uselist=False, passive_deletes=True
    )

    def ban_in_effect(self, now: datetime | None = None) -> bool:
        """True while the account is banned; a ban with a past end date has lapsed."""
        if not self.is_banned:
            return False
        if self.banned_until is None:
            return True
        return (now or _now()) < self.banned_until


class Session(Base):
    """Login grant identified by an opaque bearer token (stored as SHA-256)."""

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    user: Mapped[User] = relationship("User", back_populates="sessions")

    def is_active(self, now: datetime | None = None) -> bool:
        """Not revoked and not yet expired."""
        return self.revoked_at is None and (now or _now()) < self.expires_at


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------


class Player(Base):
    """Game profile, one per user."""

    __tablename__ = "players"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    display_name: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    avatar_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    region: Mapped[str] = mapped_column(String(16), nullable=False, default="ASIA", server_default="ASIA")
    language: Mapped[str] = mapped_column(String(8), nullable=False, default="en", server_default="en")

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)

    user: Mapped[User] = relationship("User", back_populates="player")


class PlayerStats(Base):
    """Cumulative per-player match statistics."""

    __tablename__ = "player_stats"

    player_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("players.id", ondelete="CASCADE"), primary_key=True
    )
    total_matches: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    matches_won: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    matches_lost: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    total_kills: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
    total_deaths: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
    total_assists: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
    total_headshots: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")

    total_damage_dealt: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
    total_damage_received: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")

    total_score: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
    playtime_seconds: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")

    last_updated: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)


class PlayerProgression(Base):
    """Level and XP state per player."""

    __tablename__ = "player_progression"

    player_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("players.id", ondelete="CASCADE"), primary_key=True
    )
    current_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    current_xp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
    total_xp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
    xp_multiplier: Mapped[float] = mapped_column(
        Numeric(3, 2, asdecimal=False), nullable=False, default=1.0, server_default="1.0"
    )
    xp_booster_expires: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    last_updated: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)


# ---------------------------------------------------------------------------
# Static game data
# ---------------------------------------------------------------------------


class Weapon(Base):
    """Weapon catalogue entry."""

    __tablename__ = "weapons"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    weapon_key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    weapon_type: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    rarity: Mapped[str] = mapped_column(String(16), nullable=False, default="common", server_default="common")
    base_damage: Mapped[int] = mapped_column(Integer, nullable=False)
    unlock_level: Mapped[int | None] = mapped_column(Integer, nullable=True, default=1, server_default="1")
    unlock_cost: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0, server_default="0")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)

    attachments: Mapped[list[WeaponAttachment]] = relationship(
        "WeaponAttachment", back_populates="weapon", passive_deletes=True
    )


class WeaponAttachment(Base):
    """Attachment that can be fitted to a weapon."""

    __tablename__ = "weapon_attachments"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    weapon_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("weapons.id", ondelete="CASCADE"), nullable=True, index=True
    )
    attachment_type: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    unlock_level: Mapped[int | None] = mapped_column(Integer, nullable=True, default=1, server_default="1")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)

    weapon: Mapped[Weapon | None] = relationship("Weapon", back_populates="attachments")


class GameMap(Base):
    """Playable map."""

    __tablename__ = "maps"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    map_key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    max_players: Mapped[int] = mapped_column(Integer, nullable=False)
    supported_modes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    size_category: Mapped[str | None] = mapped_column(String(16), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_now)
