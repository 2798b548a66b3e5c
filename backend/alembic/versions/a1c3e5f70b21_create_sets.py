"""create sets table

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2026-01-05 19:12:40.118204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f70b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'sets',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('device_id', sa.String(length=64), nullable=False, index=True),
        sa.Column('workout_type', sa.String(length=64), nullable=True),
        sa.Column('weight_lb', sa.Float(), nullable=True),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('rest_seconds', sa.Integer(), nullable=True),
        sa.Column('performed_at_iso', sa.String(length=32), nullable=True),
        sa.Column('created_at_iso', sa.String(length=32), nullable=False),
        sa.Column('updated_at_iso', sa.String(length=32), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('sets')
