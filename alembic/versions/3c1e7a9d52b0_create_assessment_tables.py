"""create_assessment_tables

Revision ID: 3c1e7a9d52b0
Revises: 
Create Date: 2026-10-19 09:12:44.118203

Creates rubrics, candidates and evaluations. Tables that already exist
(e.g. created by init_db on a dev database) are left alone.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '3c1e7a9d52b0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('rubrics'):
        op.create_table('rubrics',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('categories', sa.JSON(), nullable=False),
            sa.Column('max_score', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_rubrics_id'), 'rubrics', ['id'], unique=False)

    if not table_exists('candidates'):
        op.create_table('candidates',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('position', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_candidates_id'), 'candidates', ['id'], unique=False)
        op.create_index(op.f('ix_candidates_email'), 'candidates', ['email'], unique=False)

    if not table_exists('evaluations'):
        op.create_table('evaluations',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('candidate_id', sa.Integer(), nullable=False),
            sa.Column('rubric_id', sa.Integer(), nullable=False),
            sa.Column('scores', sa.JSON(), nullable=False),
            sa.Column('overall_score', sa.String(length=8), nullable=False),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('evaluator_name', sa.String(), nullable=False),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['candidate_id'], ['candidates.id'], ),
            sa.ForeignKeyConstraint(['rubric_id'], ['rubrics.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_evaluation_candidate_status', 'evaluations', ['candidate_id', 'status'], unique=False)
        op.create_index(op.f('ix_evaluations_candidate_id'), 'evaluations', ['candidate_id'], unique=False)
        op.create_index(op.f('ix_evaluations_id'), 'evaluations', ['id'], unique=False)
        op.create_index(op.f('ix_evaluations_rubric_id'), 'evaluations', ['rubric_id'], unique=False)
        op.create_index(op.f('ix_evaluations_status'), 'evaluations', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_evaluations_status'), table_name='evaluations')
    op.drop_index(op.f('ix_evaluations_rubric_id'), table_name='evaluations')
    op.drop_index(op.f('ix_evaluations_id'), table_name='evaluations')
    op.drop_index(op.f('ix_evaluations_candidate_id'), table_name='evaluations')
    op.drop_index('idx_evaluation_candidate_status', table_name='evaluations')
    op.drop_table('evaluations')

    op.drop_index(op.f('ix_candidates_email'), table_name='candidates')
    op.drop_index(op.f('ix_candidates_id'), table_name='candidates')
    op.drop_table('candidates')

    op.drop_index(op.f('ix_rubrics_id'), table_name='rubrics')
    op.drop_table('rubrics')
