"""add_progress_tables

Revision ID: 8d4b6a1c2e57
Revises: 5c1e2f7a9b30
Create Date: 2026-02-02 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '8d4b6a1c2e57'
down_revision: Union[str, None] = '5c1e2f7a9b30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

lesson_progress_status = postgresql.ENUM(
    'not_started', 'started', 'completed', name='lesson_progress_status', create_type=False
)


def upgrade() -> None:
    lesson_progress_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        'lesson_progress',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('lesson_id', sa.Uuid(), nullable=False),
        sa.Column('status', lesson_progress_status, nullable=False),
        sa.Column('quiz_score', sa.Float(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['lesson_id'], ['lessons.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'lesson_id', name='uq_user_lesson_progress'),
        sa.CheckConstraint(
            'quiz_score IS NULL OR (quiz_score >= 0 AND quiz_score <= 100)',
            name='ck_lesson_progress_quiz_score_range',
        ),
    )
    op.create_index(op.f('ix_lesson_progress_user_id'), 'lesson_progress', ['user_id'], unique=False)
    op.create_index(op.f('ix_lesson_progress_lesson_id'), 'lesson_progress', ['lesson_id'], unique=False)

    op.create_table(
        'topic_progress',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('topic_id', sa.Uuid(), nullable=False),
        sa.Column('percent_complete', sa.Integer(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['topic_id'], ['topics.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'topic_id', name='uq_user_topic_progress'),
        sa.CheckConstraint(
            'percent_complete >= 0 AND percent_complete <= 100',
            name='ck_topic_progress_percent_range',
        ),
    )
    op.create_index(op.f('ix_topic_progress_user_id'), 'topic_progress', ['user_id'], unique=False)
    op.create_index(op.f('ix_topic_progress_topic_id'), 'topic_progress', ['topic_id'], unique=False)

    op.create_table(
        'subject_progress',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('course_id', sa.Uuid(), nullable=False),
        sa.Column('percent_complete', sa.Integer(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'course_id', name='uq_user_subject_progress'),
        sa.CheckConstraint(
            'percent_complete >= 0 AND percent_complete <= 100',
            name='ck_subject_progress_percent_range',
        ),
    )
    op.create_index(op.f('ix_subject_progress_user_id'), 'subject_progress', ['user_id'], unique=False)
    op.create_index(op.f('ix_subject_progress_course_id'), 'subject_progress', ['course_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_subject_progress_course_id'), table_name='subject_progress')
    op.drop_index(op.f('ix_subject_progress_user_id'), table_name='subject_progress')
    op.drop_table('subject_progress')
    op.drop_index(op.f('ix_topic_progress_topic_id'), table_name='topic_progress')
    op.drop_index(op.f('ix_topic_progress_user_id'), table_name='topic_progress')
    op.drop_table('topic_progress')
    op.drop_index(op.f('ix_lesson_progress_lesson_id'), table_name='lesson_progress')
    op.drop_index(op.f('ix_lesson_progress_user_id'), table_name='lesson_progress')
    op.drop_table('lesson_progress')
    lesson_progress_status.drop(op.get_bind(), checkfirst=True)
