"""create_bookmark_tables

Revision ID: 4c1f9a2e7b31
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1f9a2e7b31'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create bookmarks and bookmark_tags tables."""
    op.create_table('bookmarks',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('url_key', sa.Text(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), server_default='', nullable=False),
        sa.Column('favicon', sa.Text(), server_default='', nullable=False),
        sa.Column('is_favorite', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('url_key'),
    )
    op.create_index('ix_bookmarks_is_favorite', 'bookmarks', ['is_favorite'], unique=False)
    op.create_index('ix_bookmarks_created_at', 'bookmarks', ['created_at'], unique=False)

    # Ordered tags, one row per tag occurrence
    op.create_table('bookmark_tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('bookmark_id', sa.Uuid(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['bookmark_id'], ['bookmarks.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_bookmark_tags_name', 'bookmark_tags', ['name'], unique=False)
    op.create_index(
        'ix_bookmark_tags_bookmark_position',
        'bookmark_tags',
        ['bookmark_id', 'position'],
        unique=False,
    )


def downgrade() -> None:
    """Drop bookmark tables."""
    op.drop_index('ix_bookmark_tags_bookmark_position', table_name='bookmark_tags')
    op.drop_index('ix_bookmark_tags_name', table_name='bookmark_tags')
    op.drop_table('bookmark_tags')
    op.drop_index('ix_bookmarks_created_at', table_name='bookmarks')
    op.drop_index('ix_bookmarks_is_favorite', table_name='bookmarks')
    op.drop_table('bookmarks')
