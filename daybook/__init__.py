"""
daybook
=======

A personal journal kept in a local SQLite database.

Entries are timestamped text records with optional tags. The database
layer keeps tags unique by text, associates them many-to-many with
entries, and removes tags once no entry uses them. A click-based CLI
provides create/list/show/edit/delete commands on top of it.

Primary Interfaces:
    - daybook.database.manager.JournalDB: Main database interface
    - daybook.cli: Command-line interface

Example Usage:
    >>> from daybook import JournalDB
    >>> with JournalDB("~/journal.db") as db:
    ...     entry = db.create_entry("Monday", "Slept well.", ["sleep"])
    ...     [e.title for e in db.list_entries()]
    ['Monday']
"""

__version__ = "0.3.0"

from daybook.database.manager import JournalDB
from daybook.core.paths import DATA_DIR, DB_PATH, LOG_DIR

__all__ = [
    "JournalDB",
    "DATA_DIR",
    "DB_PATH",
    "LOG_DIR",
]
