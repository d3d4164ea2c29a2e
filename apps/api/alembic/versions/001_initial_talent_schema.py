"""initial schema: profiles, coaches, athletes, videos, assessments, training plans

Revision ID: 001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _created_at():
    return sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', sa.Text(), primary_key=True),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('full_name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('role', sa.Text(), nullable=False, server_default='athlete'),
        _created_at(),
    )
    op.create_table(
        'coaches',
        sa.Column('id', sa.Text(), primary_key=True),
        sa.Column('profile_id', sa.Text(), sa.ForeignKey('profiles.id'), nullable=False),
        sa.Column('experience_years', sa.Integer(), nullable=True),
        _created_at(),
    )
    op.create_table(
        'athletes',
        sa.Column('id', sa.Text(), primary_key=True),
        sa.Column('profile_id', sa.Text(), sa.ForeignKey('profiles.id'), nullable=False),
        sa.Column('coach_id', sa.Text(), sa.ForeignKey('coaches.id'), nullable=True),
        sa.Column('primary_sport', sa.Text(), nullable=False),
        sa.Column('preferred_position', sa.Text(), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=True),
        sa.Column('height_cm', sa.Float(), nullable=True),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        _created_at(),
    )
    op.create_table(
        'videos',
        sa.Column('id', sa.Text(), primary_key=True),
        sa.Column('athlete_id', sa.Text(), sa.ForeignKey('athletes.id'), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('video_url', sa.Text(), nullable=False),
        sa.Column('sport_type', sa.Text(), nullable=False),
        sa.Column('video_type', sa.Text(), nullable=False),
        sa.Column('upload_status', sa.Text(), nullable=True),
        sa.Column('is_analyzed', sa.Boolean(), nullable=False, server_default=sa.false()),
        _created_at(),
    )
    op.create_index('ix_videos_athlete_id', 'videos', ['athlete_id'])
    op.create_table(
        'assessments',
        sa.Column('id', sa.Text(), primary_key=True),
        sa.Column('video_id', sa.Text(), sa.ForeignKey('videos.id'), nullable=False),
        sa.Column('athlete_id', sa.Text(), sa.ForeignKey('athletes.id'), nullable=False),
        sa.Column('overall_score', sa.Float(), nullable=False),
        sa.Column('technique_score', sa.Float(), nullable=True),
        sa.Column('speed_score', sa.Float(), nullable=True),
        sa.Column('power_score', sa.Float(), nullable=True),
        sa.Column('endurance_score', sa.Float(), nullable=True),
        sa.Column('flexibility_score', sa.Float(), nullable=True),
        sa.Column('strengths', JSONType, nullable=True),
        sa.Column('weaknesses', JSONType, nullable=True),
        sa.Column('recommendations', JSONType, nullable=True),
        sa.Column('detailed_feedback', sa.Text(), nullable=True),
        sa.Column('ai_confidence', sa.Float(), nullable=True),
        sa.Column('analysis_data', JSONType, nullable=True),
        _created_at(),
        sa.CheckConstraint('overall_score >= 0 AND overall_score <= 100', name='ck_assessment_overall_range'),
    )
    op.create_index('ix_assessments_video_id', 'assessments', ['video_id'])
    op.create_index('ix_assessments_athlete_created', 'assessments', ['athlete_id', 'created_at'])
    op.create_table(
        'training_plans',
        sa.Column('id', sa.Text(), primary_key=True),
        sa.Column('athlete_id', sa.Text(), sa.ForeignKey('athletes.id'), nullable=False),
        sa.Column('coach_id', sa.Text(), sa.ForeignKey('coaches.id'), nullable=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sport_type', sa.Text(), nullable=False),
        sa.Column('duration_weeks', sa.Integer(), nullable=True),
        sa.Column('difficulty_level', sa.Integer(), nullable=True),
        sa.Column('goals', JSONType, nullable=True),
        sa.Column('plan_data', JSONType, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('progress_percentage', sa.Float(), nullable=False, server_default='0'),
        _created_at(),
        sa.CheckConstraint('difficulty_level >= 1 AND difficulty_level <= 5', name='ck_training_plan_difficulty_range'),
    )
    op.create_index('ix_training_plans_athlete_created', 'training_plans', ['athlete_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_training_plans_athlete_created', table_name='training_plans')
    op.drop_table('training_plans')
    op.drop_index('ix_assessments_athlete_created', table_name='assessments')
    op.drop_index('ix_assessments_video_id', table_name='assessments')
    op.drop_table('assessments')
    op.drop_index('ix_videos_athlete_id', table_name='videos')
    op.drop_table('videos')
    op.drop_table('athletes')
    op.drop_table('coaches')
    op.drop_table('profiles')
