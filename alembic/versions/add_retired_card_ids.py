"""add retired card ids

Revision ID: add_retired_card_ids
Revises: add_card_category
Create Date: 2026-10-19

Records the ids of deleted cards so they are never generated again.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'add_retired_card_ids'
down_revision: Union[str, None] = 'add_card_category'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    conn = op.get_bind()
    inspector = sa.inspect(conn)

    if 'retired_card_ids' not in inspector.get_table_names():
        op.create_table(
            'retired_card_ids',
            sa.Column('id', sa.String(64), primary_key=True),
            sa.Column('retired_at', sa.DateTime(timezone=True), nullable=False),
        )


def downgrade() -> None:
    conn = op.get_bind()
    inspector = sa.inspect(conn)

    if 'retired_card_ids' in inspector.get_table_names():
        op.drop_table('retired_card_ids')
