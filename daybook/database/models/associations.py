"""
Association Tables
-------------------

Many-to-many relationship tables for the journal database.

entry_tags links entries with tags. The composite primary key keeps each
(entry, tag) pair unique; both foreign keys cascade on delete so removing
an entry or a tag removes its links.
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, Integer, Table

# --- Local imports ---
from .base import Base

entry_tags = Table(
    "entry_tags",
    Base.metadata,
    Column(
        "entry_id",
        Integer,
        ForeignKey("entries.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)
