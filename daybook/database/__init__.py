"""
Journal Database Package
------------------------

SQLAlchemy models, entity managers, the in-memory snapshot and the
JournalDB facade tying them together.

Usage:
    from daybook.database import JournalDB

    db = JournalDB("~/.daybook/journal.db")
    db.create_entry("Monday", "Slept well.", ["sleep"])
"""
from .manager import JournalDB
from .snapshot import DecodedRow, EntryRecord, EntrySnapshot, TagRecord, decode_entry_row

__all__ = [
    "JournalDB",
    "EntryRecord",
    "TagRecord",
    "EntrySnapshot",
    "DecodedRow",
    "decode_entry_row",
]
