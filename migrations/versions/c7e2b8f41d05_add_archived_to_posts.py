"""add archived to posts

Revision ID: c7e2b8f41d05
Revises: a1f3c9d27b10
Create Date: 2025-10-21 18:03:27.904511

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c7e2b8f41d05'
down_revision: Union[str, Sequence[str], None] = 'a1f3c9d27b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # postsテーブルにarchivedカラムを追加(一覧から外すが削除はしない)
    op.add_column('posts', sa.Column('archived', sa.Boolean(), nullable=False, server_default=sa.false()))


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_column('posts', 'archived')
