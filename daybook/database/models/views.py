"""
Derived Views
-------------

Read-only views over the journal tables.

entries_with_tags flattens every entry together with a colon-delimited
list of its tag ids (``"3:7:12"``). The join is a LEFT JOIN so untagged
entries are present with ``tag_ids`` NULL.

The view is described with a Table on its own MetaData so it can be
queried with typed select() statements while staying out of
Base.metadata.create_all().
"""
# --- Third party imports ---
from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, Text

TAG_ID_SEPARATOR = ":"

view_metadata = MetaData()

entries_with_tags = Table(
    "entries_with_tags",
    view_metadata,
    Column("id", Integer, primary_key=True),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
    Column("title", Text),
    Column("content", Text),
    Column("tag_ids", String),
)

CREATE_ENTRIES_WITH_TAGS = f"""
CREATE VIEW IF NOT EXISTS entries_with_tags AS
SELECT
    entries.id AS id,
    entries.created_at AS created_at,
    entries.updated_at AS updated_at,
    entries.title AS title,
    entries.content AS content,
    group_concat(entry_tags.tag_id, '{TAG_ID_SEPARATOR}') AS tag_ids
FROM entries
LEFT JOIN entry_tags ON entries.id = entry_tags.entry_id
GROUP BY entries.id
"""

DROP_ENTRIES_WITH_TAGS = "DROP VIEW IF EXISTS entries_with_tags"
