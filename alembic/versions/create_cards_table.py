"""create cards table

Revision ID: create_cards_table
Revises:
Create Date: 2026-02-10

Creates the cards table with indexes on topic and type.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'create_cards_table'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = inspector.get_table_names()

    if 'cards' not in existing_tables:
        op.create_table(
            'cards',
            sa.Column('id', sa.String(64), primary_key=True),
            sa.Column('topic', sa.String(200), nullable=False),
            sa.Column('type', sa.String(50), nullable=False),
            sa.Column('title', sa.String(500), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            # Formula fields
            sa.Column('latex', sa.Text(), nullable=True),
            sa.Column('variables', sa.JSON(), nullable=True),
            sa.Column('result_unit', sa.String(100), nullable=True),
            sa.Column('conditions', sa.Text(), nullable=True),
            # Graph fields
            sa.Column('axes', sa.JSON(), nullable=True),
            sa.Column('key_features', sa.JSON(), nullable=True),
            # Image fields
            sa.Column('image', sa.Text(), nullable=True),
            sa.Column('image_needed', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('image_description', sa.Text(), nullable=True),
            # Timestamps
            sa.Column(
                'created_at',
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.func.now()
            ),
            sa.Column(
                'updated_at',
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.func.now()
            ),
        )

        op.create_index('ix_cards_topic', 'cards', ['topic'])
        op.create_index('ix_cards_type', 'cards', ['type'])


def downgrade() -> None:
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = inspector.get_table_names()

    if 'cards' in existing_tables:
        op.drop_index('ix_cards_type', table_name='cards')
        op.drop_index('ix_cards_topic', table_name='cards')
        op.drop_table('cards')
