"""Initial journal schema

Revision ID: 3c1f9a7d2e41
Revises:
Create Date: 2026-10-18 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from daybook.database.models.views import (
    CREATE_ENTRIES_WITH_TAGS,
    DROP_ENTRIES_WITH_TAGS,
)


# revision identifiers, used by Alembic.
revision: str = '3c1f9a7d2e41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create entries, tags, entry_tags and the entries_with_tags view."""
    op.create_table(
        'entries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_entries_created_at', 'entries', ['created_at'])

    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tag', sa.String(length=255), nullable=False),
        sa.CheckConstraint("tag != ''", name='ck_non_empty_tag'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tags_tag', 'tags', ['tag'], unique=True)

    op.create_table(
        'entry_tags',
        sa.Column('entry_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['entry_id'], ['entries.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('entry_id', 'tag_id'),
    )
    op.create_index('ix_entry_tags_tag_id', 'entry_tags', ['tag_id'])

    op.execute(CREATE_ENTRIES_WITH_TAGS)


def downgrade() -> None:
    """Drop the view, then the tables in dependency order."""
    op.execute(DROP_ENTRIES_WITH_TAGS)
    op.drop_index('ix_entry_tags_tag_id', table_name='entry_tags')
    op.drop_table('entry_tags')
    op.drop_index('ix_tags_tag', table_name='tags')
    op.drop_table('tags')
    op.drop_index('ix_entries_created_at', table_name='entries')
    op.drop_table('entries')
