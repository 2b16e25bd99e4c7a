#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the journal database.

Available Managers:
    BaseManager: Abstract base class with common utilities
    TagManager: Tag lookup, entry-tag links, orphan pruning
    EntryManager: Entry create/update/delete

Usage:
    from daybook.database.managers import EntryManager, TagManager

    entry_mgr = EntryManager(session, logger)
    tag_mgr = TagManager(session, logger)
"""
from .base_manager import BaseManager
from .tag_manager import TagManager
from .entry_manager import EntryManager

__all__ = [
    "BaseManager",
    "TagManager",
    "EntryManager",
]
