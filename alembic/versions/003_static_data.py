"""Static game catalogue: weapons, weapon attachments and maps.

Rows are seeded by the application at startup (crossfire.static_data.seed),
not by this migration.

Revision ID: 003_static_data
Revises: 002_player_tables
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "003_static_data"
down_revision: str | None = "002_player_tables"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create weapons, weapon_attachments and maps."""
    op.create_table(
        "weapons",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column("weapon_key", sa.String(64), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("weapon_type", sa.String(16), nullable=False),
        sa.Column("rarity", sa.String(16), server_default="common", nullable=False),
        sa.Column("base_damage", sa.Integer(), nullable=False),
        sa.Column("unlock_level", sa.Integer(), server_default="1", nullable=True),
        sa.Column("unlock_cost", sa.Integer(), server_default="0", nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("weapon_key", name="uq_weapons_weapon_key"),
    )
    op.create_index("ix_weapons_weapon_type", "weapons", ["weapon_type"])

    op.create_table(
        "weapon_attachments",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column(
            "weapon_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("weapons.id", ondelete="CASCADE", name="fk_weapon_attachments_weapon_id_weapons"),
            nullable=True,
        ),
        sa.Column("attachment_type", sa.String(32), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("unlock_level", sa.Integer(), server_default="1", nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_weapon_attachments_weapon_id", "weapon_attachments", ["weapon_id"])

    op.create_table(
        "maps",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column("map_key", sa.String(64), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("max_players", sa.Integer(), nullable=False),
        sa.Column("supported_modes", sa.JSON(), nullable=False),
        sa.Column("size_category", sa.String(16), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("map_key", name="uq_maps_map_key"),
    )


def downgrade() -> None:
    """Drop static data tables."""
    op.drop_table("maps")
    op.drop_index("ix_weapon_attachments_weapon_id", table_name="weapon_attachments")
    op.drop_table("weapon_attachments")
    op.drop_index("ix_weapons_weapon_type", table_name="weapons")
    op.drop_table("weapons")
