"""create attempt_event, score_event and play_session tables

Revision ID: 5c2e7a1d9b40
Revises:
Create Date: 2026-10-16 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2e7a1d9b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'attempt_event' not in existing_tables:
        op.create_table(
            'attempt_event',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('player', sa.String(length=64), nullable=False),
            sa.Column('word', sa.String(length=64), nullable=False),
            sa.Column('definition', sa.Text(), nullable=True),
            sa.Column('guess', sa.String(length=128), nullable=False, server_default=''),
            sa.Column('correct', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('skipped', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('reaction_time', sa.Float(), nullable=True),
            sa.Column('mode', sa.String(length=32), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_attempt_event_player', 'attempt_event', ['player'])
        op.create_index('ix_attempt_event_word', 'attempt_event', ['word'])
        op.create_index('ix_attempt_event_mode', 'attempt_event', ['mode'])

    if 'score_event' not in existing_tables:
        op.create_table(
            'score_event',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('player', sa.String(length=64), nullable=False),
            sa.Column('mode', sa.String(length=32), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_score_event_player', 'score_event', ['player'])
        op.create_index('ix_score_event_mode', 'score_event', ['mode'])

    if 'play_session' not in existing_tables:
        op.create_table(
            'play_session',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('session_code', sa.String(length=8), nullable=True),
            sa.Column('player', sa.String(length=64), nullable=False),
            sa.Column('mode', sa.String(length=32), nullable=False),
            sa.Column('word_length', sa.Integer(), nullable=True),
            sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('rounds_played', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('current_word', sa.String(length=64), nullable=True),
            sa.Column('current_definition', sa.Text(), nullable=True),
            sa.Column('round_started_at', sa.Float(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_play_session_session_code', 'play_session', ['session_code'], unique=True)


def downgrade():
    op.drop_index('ix_play_session_session_code', table_name='play_session')
    op.drop_table('play_session')
    op.drop_index('ix_score_event_mode', table_name='score_event')
    op.drop_index('ix_score_event_player', table_name='score_event')
    op.drop_table('score_event')
    op.drop_index('ix_attempt_event_mode', table_name='attempt_event')
    op.drop_index('ix_attempt_event_word', table_name='attempt_event')
    op.drop_index('ix_attempt_event_player', table_name='attempt_event')
    op.drop_table('attempt_event')
