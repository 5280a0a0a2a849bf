"""create_profile_tables

Revision ID: 5b1d0c7e9a21
Revises:
Create Date: 2026-10-17 09:12:44.318201

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1d0c7e9a21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _person_columns() -> list[sa.Column]:
    return [
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('middle_initial', sa.String(length=10), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('sex', sa.String(length=50), nullable=True),
        sa.Column('race', sa.String(length=100), nullable=True),
        sa.Column('eye_color', sa.String(length=50), nullable=True),
        sa.Column('hair_color', sa.String(length=50), nullable=True),
        sa.Column('height_in_inches', sa.Integer(), nullable=True),
        sa.Column('weight_in_pounds', sa.Integer(), nullable=True),
        sa.Column('scars_and_marks', sa.Text(), nullable=True),
        sa.Column('location_name', sa.String(length=255), nullable=True),
        sa.Column('location_address', sa.String(length=500), nullable=True),
    ]


def upgrade() -> None:
    """Create profile, RMS, plan, visibility and review tables."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        *_person_columns(),
        sa.Column('analytics_token', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('analytics_token'),
    )

    op.create_table('aliases',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_aliases_profile_id', 'aliases', ['profile_id'], unique=False)

    op.create_table('images',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('source_url', sa.String(length=1000), nullable=False),
        sa.Column('position', sa.Integer(), server_default='0', nullable=False),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_images_profile_id', 'images', ['profile_id'], unique=False)

    op.create_table('rms_people',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=True),
        *_person_columns(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_id'),
    )
    op.create_index('ix_rms_people_profile_id', 'rms_people', ['profile_id'], unique=False)

    op.create_table('rms_crisis_incidents',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('rms_person_id', sa.UUID(), nullable=False),
        sa.Column('reported_at', sa.DateTime(), nullable=False),
        sa.Column('veteran', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.ForeignKeyConstraint(['rms_person_id'], ['rms_people.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_rms_crisis_incidents_person_reported',
        'rms_crisis_incidents',
        ['rms_person_id', 'reported_at'],
        unique=False,
    )

    op.create_table('response_plans',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('state', sa.String(length=20), server_default='draft', nullable=False),
        sa.Column('author_id', sa.UUID(), nullable=True),
        sa.Column('approver_id', sa.UUID(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=True),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "state IN ('draft', 'submitted', 'approved')", name='ck_response_plans_state'
        ),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_response_plans_profile_state_approved',
        'response_plans',
        ['profile_id', 'state', 'approved_at'],
        unique=False,
    )

    op.create_table('response_strategies',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('response_plan_id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('priority', sa.Integer(), server_default='0', nullable=False),
        sa.ForeignKeyConstraint(['response_plan_id'], ['response_plans.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_response_strategies_response_plan_id',
        'response_strategies',
        ['response_plan_id'],
        unique=False,
    )

    op.create_table('visibilities',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('created_by_id', sa.UUID(), nullable=True),
        sa.Column('removed_by_id', sa.UUID(), nullable=True),
        sa.Column('creation_notes', sa.Text(), nullable=True),
        sa.Column('removal_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('removed_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_visibilities_profile_id', 'visibilities', ['profile_id'], unique=False)

    op.create_table('reviews',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('reviewer_id', sa.UUID(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reviews_profile_id', 'reviews', ['profile_id'], unique=False)


def downgrade() -> None:
    """Drop profile tables."""
    op.drop_index('ix_reviews_profile_id', table_name='reviews')
    op.drop_table('reviews')
    op.drop_index('ix_visibilities_profile_id', table_name='visibilities')
    op.drop_table('visibilities')
    op.drop_index('ix_response_strategies_response_plan_id', table_name='response_strategies')
    op.drop_table('response_strategies')
    op.drop_index('ix_response_plans_profile_state_approved', table_name='response_plans')
    op.drop_table('response_plans')
    op.drop_index('ix_rms_crisis_incidents_person_reported', table_name='rms_crisis_incidents')
    op.drop_table('rms_crisis_incidents')
    op.drop_index('ix_rms_people_profile_id', table_name='rms_people')
    op.drop_table('rms_people')
    op.drop_index('ix_images_profile_id', table_name='images')
    op.drop_table('images')
    op.drop_index('ix_aliases_profile_id', table_name='aliases')
    op.drop_table('aliases')
    op.drop_table('profiles')
