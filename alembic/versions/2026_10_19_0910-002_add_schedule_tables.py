"""Add scheduled sessions, slots and completions

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 09:10:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create schedule tables."""
    op.create_table('scheduled_sessions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('intensity', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('equipment', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('frequency', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('preferred_time', sqlmodel.sql.sqltypes.AutoString(length=5), nullable=False),
        sa.Column('days', sa.JSON(), nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_scheduled_sessions_user_id'), 'scheduled_sessions', ['user_id'], unique=False)
    op.create_index(op.f('ix_scheduled_sessions_type'), 'scheduled_sessions', ['type'], unique=False)
    op.create_index(op.f('ix_scheduled_sessions_preferred_time'), 'scheduled_sessions', ['preferred_time'],
                    unique=False)

    op.create_table('schedule_slots', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('day', sqlmodel.sql.sqltypes.AutoString(length=9), nullable=False),
        sa.Column('preferred_time', sqlmodel.sql.sqltypes.AutoString(length=5), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['scheduled_sessions.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'day', 'preferred_time', name='uq_schedule_slot_user_day_time'))
    op.create_index(op.f('ix_schedule_slots_session_id'), 'schedule_slots', ['session_id'], unique=False)
    op.create_index(op.f('ix_schedule_slots_user_id'), 'schedule_slots', ['user_id'], unique=False)

    op.create_table('session_completions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('performance', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['session_id'], ['scheduled_sessions.id'], ),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_session_completions_session_id'), 'session_completions', ['session_id'],
                    unique=False)


def downgrade() -> None:
    """Drop schedule tables."""
    op.drop_index(op.f('ix_session_completions_session_id'), table_name='session_completions')
    op.drop_table('session_completions')
    op.drop_index(op.f('ix_schedule_slots_user_id'), table_name='schedule_slots')
    op.drop_index(op.f('ix_schedule_slots_session_id'), table_name='schedule_slots')
    op.drop_table('schedule_slots')
    op.drop_index(op.f('ix_scheduled_sessions_preferred_time'), table_name='scheduled_sessions')
    op.drop_index(op.f('ix_scheduled_sessions_type'), table_name='scheduled_sessions')
    op.drop_index(op.f('ix_scheduled_sessions_user_id'), table_name='scheduled_sessions')
    op.drop_table('scheduled_sessions')
