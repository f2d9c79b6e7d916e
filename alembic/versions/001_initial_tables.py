"""Initial tables

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Tournaments
    op.create_table(
        'tournaments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tournaments_start_date', 'tournaments', ['start_date'])

    # Games
    op.create_table(
        'games',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('time', sa.DateTime(), nullable=False),
        sa.Column('tournament_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['tournament_id'], ['tournaments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tournament_id', 'title', 'time', name='uq_games_tournament_title_time')
    )
    op.create_index('ix_games_tournament_id', 'games', ['tournament_id'])
    op.create_index('ix_games_tournament_time', 'games', ['tournament_id', 'time'])


def downgrade() -> None:
    op.drop_index('ix_games_tournament_time', table_name='games')
    op.drop_index('ix_games_tournament_id', table_name='games')
    op.drop_table('games')
    op.drop_index('ix_tournaments_start_date', table_name='tournaments')
    op.drop_table('tournaments')
