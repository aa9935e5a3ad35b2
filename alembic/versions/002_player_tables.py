"""Player profiles, lifetime stats and progression.

Stats and progression are one-to-one with players and keyed by player_id so
that create-if-absent can rely on the primary key conflict.

Revision ID: 002_player_tables
Revises: 001_auth_tables
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "002_player_tables"
down_revision: str | None = "001_auth_tables"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_STAT_COLUMNS = (
    ("total_matches", sa.Integer),
    ("matches_won", sa.Integer),
    ("matches_lost", sa.Integer),
    ("total_kills", sa.BigInteger),
    ("total_deaths", sa.BigInteger),
    ("total_assists", sa.BigInteger),
    ("total_headshots", sa.BigInteger),
    ("total_damage_dealt", sa.BigInteger),
    ("total_damage_received", sa.BigInteger),
    ("total_score", sa.BigInteger),
    ("playtime_seconds", sa.BigInteger),
)


def _player_fk(table: str) -> sa.Column:
    return sa.Column(
        "player_id",
        sa.Uuid(as_uuid=False),
        sa.ForeignKey("players.id", ondelete="CASCADE", name=f"fk_{table}_player_id_players"),
        primary_key=True,
    )


def upgrade() -> None:
    """Create players, player_stats and player_progression."""
    op.create_table(
        "players",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="CASCADE", name="fk_players_user_id_users"),
            nullable=False,
        ),
        sa.Column("display_name", sa.String(64), nullable=False),
        sa.Column("avatar_url", sa.String(512), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("region", sa.String(16), server_default="ASIA", nullable=False),
        sa.Column("language", sa.String(8), server_default="en", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", name="uq_players_user_id"),
    )
    op.create_index("ix_players_display_name", "players", ["display_name"])

    op.create_table(
        "player_stats",
        _player_fk("player_stats"),
        *[sa.Column(name, type_(), server_default="0", nullable=False) for name, type_ in _STAT_COLUMNS],
        sa.Column("last_updated", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "player_progression",
        _player_fk("player_progression"),
        sa.Column("current_level", sa.Integer(), server_default="1", nullable=False),
        sa.Column("current_xp", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("total_xp", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("xp_multiplier", sa.Numeric(3, 2), server_default="1.0", nullable=False),
        sa.Column("xp_booster_expires", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_updated", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("current_level >= 1", name="current_level_positive"),
    )


def downgrade() -> None:
    """Drop player tables."""
    op.drop_table("player_progression")
    op.drop_table("player_stats")
    op.drop_index("ix_players_display_name", table_name="players")
    op.drop_table("players")
