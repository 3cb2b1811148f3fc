"""create room and leaderboard tables

Revision ID: 4b7d1c2e9a10
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b7d1c2e9a10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    existing = set(sa.inspect(bind).get_table_names())
    if 'room' not in existing:
        op.create_table(
            'room',
            sa.Column('room_id', sa.Integer(), autoincrement=False, nullable=False),
            sa.Column('name', sa.String(length=128), nullable=True),
            sa.Column('items', sa.JSON(), nullable=False),
            sa.PrimaryKeyConstraint('room_id'),
        )
    if 'leaderboard' not in existing:
        op.create_table(
            'leaderboard',
            sa.Column('room_id', sa.Integer(), autoincrement=False, nullable=False),
            sa.Column('entries', sa.JSON(), nullable=False),
            sa.PrimaryKeyConstraint('room_id'),
        )


def downgrade():
    op.drop_table('leaderboard')
    op.drop_table('room')
