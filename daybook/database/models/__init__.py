"""
Database Models Package
------------------------

SQLAlchemy ORM models for the journal database.

- base: Base class and timestamp helper
- associations: entry_tags many-to-many table
- core: Entry
- entities: Tag
- views: entries_with_tags derived view

Usage:
    from daybook.database.models import Entry, Tag
"""
from .base import Base, as_utc, utc_now
from .associations import entry_tags
from .core import Entry
from .entities import Tag
from .views import (
    CREATE_ENTRIES_WITH_TAGS,
    DROP_ENTRIES_WITH_TAGS,
    TAG_ID_SEPARATOR,
    entries_with_tags,
)

__all__ = [
    "Base",
    "utc_now",
    "as_utc",
    "entry_tags",
    "Entry",
    "Tag",
    "entries_with_tags",
    "CREATE_ENTRIES_WITH_TAGS",
    "DROP_ENTRIES_WITH_TAGS",
    "TAG_ID_SEPARATOR",
]
