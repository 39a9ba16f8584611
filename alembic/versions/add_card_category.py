"""add category to cards

Revision ID: add_card_category
Revises: create_cards_table
Create Date: 2026-03-02

Adds the category column. Existing cards become 'Theorie'.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'add_card_category'
down_revision: Union[str, None] = 'create_cards_table'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    columns = [col['name'] for col in inspector.get_columns('cards')]

    if 'category' not in columns:
        op.add_column(
            'cards',
            sa.Column('category', sa.String(50), nullable=False, server_default='Theorie'),
        )
        op.create_index('ix_cards_category', 'cards', ['category'])


def downgrade() -> None:
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    columns = [col['name'] for col in inspector.get_columns('cards')]

    if 'category' in columns:
        op.drop_index('ix_cards_category', table_name='cards')
        with op.batch_alter_table('cards') as batch_op:
            batch_op.drop_column('category')
