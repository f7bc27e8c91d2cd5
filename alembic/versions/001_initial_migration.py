"""Initial migration - users, drafts, quests, cast limits, SBT badges

Revision ID: 001
Revises:
Create Date: 2025-09-15 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='Row creation time'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, comment='Last update time'),
    ]


def upgrade() -> None:
    # Create users table
    op.create_table('users',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Row identifier (UUID4 string)'),
        sa.Column('wallet_address', sa.String(length=42), nullable=False, comment='EVM wallet address (0x + 40 hex)'),
        sa.Column('farcaster_fid', sa.String(length=32), nullable=True, comment='Farcaster id'),
        sa.Column('farcaster_username', sa.String(length=100), nullable=True, comment='Farcaster username'),
        sa.Column('farcaster_display_name', sa.String(length=255), nullable=True, comment='Farcaster display name'),
        sa.Column('farcaster_avatar', sa.Text(), nullable=True, comment='Profile picture URL'),
        sa.Column('farcaster_bio', sa.Text(), nullable=True, comment='Profile bio'),
        sa.Column('base_username', sa.String(length=100), nullable=True),
        sa.Column('ens_username', sa.String(length=255), nullable=True),
        sa.Column('follower_count', sa.Integer(), nullable=True, comment='Farcaster follower count'),
        sa.Column('following_count', sa.Integer(), nullable=True, comment='Farcaster following count'),
        sa.Column('x_url', sa.Text(), nullable=True),
        sa.Column('github_url', sa.Text(), nullable=True),
        sa.Column('farcaster_url', sa.Text(), nullable=True),
        sa.Column('neynar_score', sa.Integer(), nullable=True, comment='Neynar user score scaled to 0-100'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users')
    )
    op.create_index('ix_users_wallet_address', 'users', ['wallet_address'], unique=True)

    # Create content_drafts table
    op.create_table('content_drafts',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Row identifier (UUID4 string)'),
        sa.Column('user_id', sa.String(length=36), nullable=False, comment='Owner user ID'),
        sa.Column('topic', sa.Text(), nullable=False, comment='Requested topic'),
        sa.Column('content_type', sa.String(length=50), nullable=False, comment='Post format'),
        sa.Column('tone', sa.String(length=50), nullable=False, comment='Requested tone'),
        sa.Column('generated_content', sa.Text(), nullable=True, comment='Text produced by the LLM (possibly edited)'),
        sa.Column('selected_image', sa.JSON(), nullable=True, comment='{url, alt, photographer, source}'),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('farcaster_cast_hash', sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_content_drafts_user_id_users'),
        sa.PrimaryKeyConstraint('id', name='pk_content_drafts')
    )
    op.create_index('ix_content_drafts_user_id', 'content_drafts', ['user_id'])

    # Create feedback table
    op.create_table('feedback',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Row identifier (UUID4 string)'),
        sa.Column('type', sa.String(length=20), nullable=False, comment='bug, feature, general or compliment'),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_feedback')
    )

    # Create user_quests table
    op.create_table('user_quests',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Row identifier (UUID4 string)'),
        sa.Column('user_id', sa.String(length=36), nullable=False, comment='Owner user ID'),
        sa.Column('quest_type', sa.String(length=50), nullable=False, comment='Quest type tag, e.g. daily_checkin'),
        sa.Column('last_completed_at', sa.DateTime(timezone=True), nullable=True, comment='Time of the most recent completion'),
        sa.Column('total_points', sa.DECIMAL(precision=10, scale=2), nullable=False, comment='Cumulative points earned from this quest type'),
        sa.Column('completion_count', sa.Integer(), nullable=False, comment='Number of completions'),
        sa.Column('is_one_time', sa.Boolean(), nullable=False, comment='Bonus quest that can only be completed once'),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_user_quests_user_id_users'),
        sa.PrimaryKeyConstraint('id', name='pk_user_quests'),
        sa.UniqueConstraint('user_id', 'quest_type', name='uq_user_quests_user_quest_type')
    )
    op.create_index('ix_user_quests_user_id', 'user_quests', ['user_id'])

    # Create quest_completions table
    op.create_table('quest_completions',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Row identifier (UUID4 string)'),
        sa.Column('user_id', sa.String(length=36), nullable=False, comment='Owner user ID'),
        sa.Column('quest_type', sa.String(length=50), nullable=False),
        sa.Column('points', sa.DECIMAL(precision=10, scale=2), nullable=False, comment='Points credited by this completion'),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=False, comment='Completion time'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_quest_completions_user_id_users'),
        sa.PrimaryKeyConstraint('id', name='pk_quest_completions')
    )
    op.create_index('ix_quest_completions_user_completed', 'quest_completions', ['user_id', 'completed_at'])

    # Create daily_cast_limits table
    op.create_table('daily_cast_limits',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Row identifier (UUID4 string)'),
        sa.Column('user_id', sa.String(length=36), nullable=False, comment='Owner user ID'),
        sa.Column('date', sa.String(length=10), nullable=False, comment='Ledger day, YYYY-MM-DD'),
        sa.Column('cast_count', sa.Integer(), nullable=False, comment='Casts counted for this ledger day'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_daily_cast_limits_user_id_users'),
        sa.PrimaryKeyConstraint('id', name='pk_daily_cast_limits'),
        sa.UniqueConstraint('user_id', 'date', name='uq_daily_cast_limits_user_date')
    )
    op.create_index('ix_daily_cast_limits_user_id', 'daily_cast_limits', ['user_id'])

    # Create sbt_badges table
    op.create_table('sbt_badges',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Row identifier (UUID4 string)'),
        sa.Column('user_id', sa.String(length=36), nullable=False, comment='Owner user ID'),
        sa.Column('mint_count', sa.Integer(), nullable=False, comment='Number of mints recorded'),
        sa.Column('total_paid', sa.DECIMAL(precision=18, scale=6), nullable=False, comment='Sum of mint payments in ETH'),
        sa.Column('badge_metadata', sa.JSON(), nullable=True, comment='Token metadata stored on first mint'),
        sa.Column('last_minted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_sbt_badges_user_id_users'),
        sa.PrimaryKeyConstraint('id', name='pk_sbt_badges'),
        sa.UniqueConstraint('user_id', name='uq_sbt_badges_user_id')
    )


def downgrade() -> None:
    op.drop_table('sbt_badges')
    op.drop_index('ix_daily_cast_limits_user_id', table_name='daily_cast_limits')
    op.drop_table('daily_cast_limits')
    op.drop_index('ix_quest_completions_user_completed', table_name='quest_completions')
    op.drop_table('quest_completions')
    op.drop_index('ix_user_quests_user_id', table_name='user_quests')
    op.drop_table('user_quests')
    op.drop_table('feedback')
    op.drop_index('ix_content_drafts_user_id', table_name='content_drafts')
    op.drop_table('content_drafts')
    op.drop_index('ix_users_wallet_address', table_name='users')
    op.drop_table('users')
