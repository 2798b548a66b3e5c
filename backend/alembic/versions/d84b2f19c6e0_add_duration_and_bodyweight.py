"""add duration_seconds + weight_is_bodyweight to sets

Revision ID: d84b2f19c6e0
Revises: a1c3e5f70b21
Create Date: 2026-01-09 08:03:11.540771

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'd84b2f19c6e0'
down_revision: Union[str, None] = 'a1c3e5f70b21'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # the API strips these columns on write until this has run
    op.add_column('sets', sa.Column('duration_seconds', sa.Integer(), nullable=True))
    op.add_column('sets', sa.Column('weight_is_bodyweight', sa.Boolean(), nullable=False, server_default=sa.false()))


def downgrade() -> None:
    op.drop_column('sets', 'weight_is_bodyweight')
    op.drop_column('sets', 'duration_seconds')
