#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages Tag entities and their relationships with entries.

Tag is the simplest entity in the system: a unique string with a
many-to-many relationship to entries. Tags are never created or deleted
directly by front-ends; they appear as a side effect of tagging an entry
and disappear once no entry references them.

Key Features:
    - Get-or-create semantics for tag lookup
    - Replace an entry's tag set by diff (kept tags keep their id)
    - Orphan tag pruning
    - Usage statistics

Usage:
    tag_mgr = TagManager(session, logger)

    tag = tag_mgr.get_or_create("python")
    removed = tag_mgr.replace_entry_tags(entry, ["python", "coding"])
    tag_mgr.prune_orphans()
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from sqlalchemy import delete, func, select

from daybook.core.exceptions import ValidationError
from daybook.core.validators import DataValidator
from daybook.database.decorators import handle_db_errors, log_database_operation
from daybook.database.models import Entry, Tag, entry_tags
from .base_manager import BaseManager


class TagManager(BaseManager):
    """
    Manages Tag table operations and entry-tag links.

    Tags are matched by their normalized text (surrounding whitespace
    stripped, case preserved).
    """

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_tag")
    def get(self, tag_name: str) -> Optional[Tag]:
        """
        Retrieve a tag by text.

        Returns:
            Tag object if found, None otherwise
        """
        normalized = DataValidator.normalize_string(tag_name)
        if not normalized:
            return None
        return self.session.scalars(select(Tag).filter_by(tag=normalized)).first()

    @handle_db_errors
    @log_database_operation("get_tag_by_id")
    def get_by_id(self, tag_id: int) -> Optional[Tag]:
        """Retrieve a tag by ID."""
        return self._get_by_id(Tag, tag_id)

    @handle_db_errors
    @log_database_operation("get_all_tags")
    def get_all(self) -> List[Tag]:
        """Retrieve all tags ordered by text."""
        return self._get_all(Tag, order_by="tag")

    @handle_db_errors
    @log_database_operation("get_tags_with_counts")
    def get_with_counts(self) -> List[Tuple[Tag, int]]:
        """
        Get all tags with the number of entries using each.

        Returns:
            (tag, count) pairs, most used first, ties alphabetical
        """
        usage = func.count(entry_tags.c.entry_id)
        stmt = (
            select(Tag, usage)
            .outerjoin(entry_tags, Tag.id == entry_tags.c.tag_id)
            .group_by(Tag.id)
            .order_by(usage.desc(), Tag.tag)
        )
        return [(tag, count) for tag, count in self.session.execute(stmt).all()]

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_or_create_tag")
    def get_or_create(self, tag_name: str) -> Tag:
        """
        Get an existing tag or create it if it doesn't exist.

        Safe to call repeatedly with the same text; the UNIQUE constraint on
        tags.tag backs the lookup.

        Raises:
            ValidationError: If tag_name is empty after normalization
        """
        normalized = DataValidator.normalize_string(tag_name)
        if not normalized:
            raise ValidationError("Tag cannot be empty")

        tag = self._get_or_create(Tag, {"tag": normalized})
        self.log.log_debug("Resolved tag", {"tag": tag.tag, "tag_id": tag.id})
        return tag

    # -------------------------------------------------------------------------
    # Relationship Management
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("replace_entry_tags")
    def replace_entry_tags(self, entry: Entry, tag_names: Iterable[str]) -> List[Tag]:
        """
        Make ``tag_names`` the complete tag set of ``entry``.

        The difference with the current set is computed first; only links
        that disappear are removed and only new ones are inserted, so a tag
        kept across the edit is never detached.

        Args:
            entry: Persisted Entry
            tag_names: Desired tag texts (normalized and de-duplicated here)

        Returns:
            Tags whose link to the entry was removed (prune candidates)

        Raises:
            ValidationError: If entry is not persisted
        """
        if entry.id is None:
            raise ValidationError("Entry must be persisted before updating tags")

        wanted = DataValidator.normalize_tag_names(tag_names)
        current = {tag.tag: tag for tag in entry.tags}

        removed = [tag for name, tag in current.items() if name not in wanted]
        for tag in removed:
            entry.tags.remove(tag)

        added = [name for name in wanted if name not in current]
        for name in added:
            entry.tags.append(self.get_or_create(name))

        self.session.flush()

        if added or removed:
            self.log.log_debug(
                "Updated entry tags",
                {
                    "entry_id": entry.id,
                    "added": added,
                    "removed": [tag.tag for tag in removed],
                },
            )
        return removed

    # -------------------------------------------------------------------------
    # Garbage Collection
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("prune_orphan_tags")
    def prune_orphans(self) -> int:
        """
        Delete every tag that has no remaining entry association.

        Returns:
            Number of tags deleted
        """
        linked = select(entry_tags.c.tag_id)
        orphan_ids = list(
            self.session.scalars(select(Tag.id).where(Tag.id.not_in(linked))).all()
        )
        if not orphan_ids:
            return 0

        self.session.execute(
            delete(Tag)
            .where(Tag.id.in_(orphan_ids))
            .execution_options(synchronize_session="fetch")
        )
        self.session.flush()

        self.log.log_info("Pruned orphan tags", {"count": len(orphan_ids)})
        return len(orphan_ids)
