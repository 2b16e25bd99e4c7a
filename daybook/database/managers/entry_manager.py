#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manager for Entry CRUD operations.

Key Features:
    - Entry creation with tag resolution
    - Title/content updates with explicit updated_at refresh
    - Tag-set replacement followed by orphan pruning
    - Deletion with association cascade and orphan pruning

Every method works inside the caller's session; JournalDB wraps each
call in one transaction.

Usage:
    entry_mgr = EntryManager(session, logger)
    entry = entry_mgr.create("Monday", "Slept well.", ["sleep"])
"""
from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy.orm import Session

from daybook.core.exceptions import EntryNotFoundError, ValidationError
from daybook.core.logging_manager import JournalLogger
from daybook.database.decorators import handle_db_errors, log_database_operation
from daybook.database.models import Entry, as_utc, utc_now
from .base_manager import BaseManager
from .tag_manager import TagManager


class EntryManager(BaseManager):
    """
    Manager for Entry create/update/delete.

    Tag bookkeeping is delegated to a TagManager sharing the same session,
    so entry rows, links and tag rows change in one transaction.
    """

    def __init__(self, session: Session, logger: Optional[JournalLogger] = None):
        super().__init__(session, logger)
        self.tags = TagManager(session, logger)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_entry")
    def get(self, entry_id: int) -> Optional[Entry]:
        """Retrieve an entry by ID, or None."""
        return self._get_by_id(Entry, entry_id)

    def _require(self, entry_id: Optional[int]) -> Entry:
        if entry_id is None:
            raise ValidationError("Entry must be persisted (missing id)")
        entry = self._get_by_id(Entry, entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_entry")
    def create(
        self,
        title: str,
        content: str,
        tags: Optional[Iterable[str]] = None,
    ) -> Entry:
        """
        Create a new entry and link its tags.

        Args:
            title: Entry title
            content: Entry body
            tags: Tag texts; created on first use

        Returns:
            Flushed Entry with id and timestamps assigned
        """
        now = utc_now()
        entry = Entry(
            title=title or "",
            content=content or "",
            created_at=now,
            updated_at=now,
        )
        self.session.add(entry)
        self.session.flush()

        if tags:
            self.tags.replace_entry_tags(entry, tags)

        self.log.log_debug(
            "Created entry",
            {"entry_id": entry.id, "tag_count": len(entry.tags)},
        )
        return entry

    @handle_db_errors
    @log_database_operation("update_entry")
    def update(
        self,
        entry_id: int,
        title: str,
        content: str,
        tags: Optional[Iterable[str]] = None,
    ) -> Entry:
        """
        Update title/content and, optionally, the full tag set.

        Args:
            entry_id: ID of the entry to update
            title: New title
            content: New content
            tags: New complete tag set; None leaves tags untouched

        Returns:
            The updated Entry

        Raises:
            EntryNotFoundError: If no entry has this id
        """
        entry = self._require(entry_id)

        entry.title = title or ""
        entry.content = content or ""
        # updated_at never goes backwards nor before created_at
        floor = max(as_utc(entry.created_at), as_utc(entry.updated_at))
        entry.updated_at = max(utc_now(), floor)

        if tags is not None:
            removed = self.tags.replace_entry_tags(entry, tags)
            if removed:
                self.tags.prune_orphans()

        self.session.flush()
        return entry

    @handle_db_errors
    @log_database_operation("delete_entry")
    def delete(self, entry_id: int) -> None:
        """
        Delete an entry, its tag links and any tag left unused.

        Raises:
            EntryNotFoundError: If no entry has this id
        """
        entry = self._require(entry_id)
        had_tags = bool(entry.tags)

        self.session.delete(entry)
        self.session.flush()

        if had_tags:
            self.tags.prune_orphans()

        self.log.log_debug("Deleted entry", {"entry_id": entry_id})
