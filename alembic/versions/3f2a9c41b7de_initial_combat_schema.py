"""Initial combat schema

Revision ID: 3f2a9c41b7de
Revises:
Create Date: 2026-10-18 10:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c41b7de'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]
    if updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False)
        )
    return columns


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'kingdoms',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('owner_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('race', sa.String(), nullable=False),
        sa.Column('era', sa.String(), nullable=False),
        sa.Column('gold', sa.Integer(), nullable=False),
        sa.Column('population', sa.Integer(), nullable=False),
        sa.Column('mana', sa.Integer(), nullable=False),
        sa.Column('land', sa.Integer(), nullable=False),
        sa.Column('turns_balance', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("era IN ('early', 'middle', 'late')", name='ck_kingdoms_era'),
        sa.CheckConstraint('gold >= 0', name='ck_kingdoms_gold'),
        sa.CheckConstraint('population >= 0', name='ck_kingdoms_population'),
        sa.CheckConstraint('mana >= 0', name='ck_kingdoms_mana'),
        sa.CheckConstraint('land >= 1000', name='ck_kingdoms_land_floor'),
        sa.CheckConstraint('turns_balance >= 0', name='ck_kingdoms_turns'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_kingdoms_owner', 'kingdoms', ['owner_id'])

    op.create_table(
        'kingdom_units',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('kingdom_id', sa.String(length=36), nullable=False),
        sa.Column('unit_type', sa.String(), nullable=False),
        sa.Column('count', sa.Integer(), nullable=False),
        sa.CheckConstraint('count >= 0', name='ck_kingdom_units_count'),
        sa.ForeignKeyConstraint(['kingdom_id'], ['kingdoms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('kingdom_id', 'unit_type', name='uq_kingdom_units_type'),
    )

    op.create_table(
        'kingdom_effects',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('kingdom_id', sa.String(length=36), nullable=False),
        sa.Column('effect_type', sa.String(), nullable=False),
        sa.Column('magnitude', sa.Float(), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['kingdom_id'], ['kingdoms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_kingdom_effects_lookup', 'kingdom_effects', ['kingdom_id', 'effect_type'])

    op.create_table(
        'territories',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('owner_kingdom_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('kind', sa.String(), nullable=False),
        sa.Column('terrain_type', sa.String(), nullable=False),
        sa.Column('defense_level', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("kind IN ('capital', 'settlement', 'outpost', 'fortress')", name='ck_territories_kind'),
        sa.CheckConstraint('defense_level >= 0', name='ck_territories_defense'),
        sa.ForeignKeyConstraint(['owner_kingdom_id'], ['kingdoms.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_territories_owner', 'territories', ['owner_kingdom_id'])

    op.create_table(
        'battle_reports',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('attacker_id', sa.String(length=36), nullable=False),
        sa.Column('defender_id', sa.String(length=36), nullable=False),
        sa.Column('attack_type', sa.String(), nullable=False),
        sa.Column('result_tier', sa.String(), nullable=False),
        sa.Column('power_ratio', sa.Float(), nullable=False),
        sa.Column('casualties', sa.JSON(), nullable=False),
        sa.Column('land_gained', sa.Integer(), nullable=False),
        sa.Column('gold_looted', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(updated=False),
        sa.CheckConstraint("result_tier IN ('with_ease', 'good_fight', 'failed')", name='ck_battle_reports_tier'),
        sa.CheckConstraint('land_gained >= 0', name='ck_battle_reports_land'),
        sa.CheckConstraint('gold_looted >= 0', name='ck_battle_reports_gold'),
        sa.ForeignKeyConstraint(['attacker_id'], ['kingdoms.id']),
        sa.ForeignKeyConstraint(['defender_id'], ['kingdoms.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_battle_reports_pair', 'battle_reports', ['attacker_id', 'defender_id'])

    op.create_table(
        'war_declarations',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('attacker_id', sa.String(length=36), nullable=False),
        sa.Column('defender_id', sa.String(length=36), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('attack_count', sa.Integer(), nullable=False),
        sa.Column('reason', sa.String(), nullable=True),
        sa.Column('declared_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("status IN ('active', 'resolved')", name='ck_war_declarations_status'),
        sa.CheckConstraint('attack_count >= 0', name='ck_war_declarations_attacks'),
        sa.ForeignKeyConstraint(['attacker_id'], ['kingdoms.id']),
        sa.ForeignKeyConstraint(['defender_id'], ['kingdoms.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_war_declarations_pair', 'war_declarations', ['attacker_id', 'defender_id', 'status'])

    op.create_table(
        'restoration_statuses',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('kingdom_id', sa.String(length=36), nullable=False),
        sa.Column('kind', sa.String(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('allowed_actions', sa.JSON(), nullable=False),
        sa.Column('prohibited_actions', sa.JSON(), nullable=False),
        *_timestamps(updated=False),
        sa.CheckConstraint("kind IN ('damage_based', 'death_based')", name='ck_restoration_statuses_kind'),
        sa.ForeignKeyConstraint(['kingdom_id'], ['kingdoms.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_restoration_statuses_kingdom', 'restoration_statuses', ['kingdom_id', 'end_time'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_restoration_statuses_kingdom', table_name='restoration_statuses')
    op.drop_table('restoration_statuses')
    op.drop_index('idx_war_declarations_pair', table_name='war_declarations')
    op.drop_table('war_declarations')
    op.drop_index('idx_battle_reports_pair', table_name='battle_reports')
    op.drop_table('battle_reports')
    op.drop_index('idx_territories_owner', table_name='territories')
    op.drop_table('territories')
    op.drop_index('idx_kingdom_effects_lookup', table_name='kingdom_effects')
    op.drop_table('kingdom_effects')
    op.drop_table('kingdom_units')
    op.drop_index('idx_kingdoms_owner', table_name='kingdoms')
    op.drop_table('kingdoms')
