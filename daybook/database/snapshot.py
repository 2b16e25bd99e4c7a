#!/usr/bin/env python3
"""
snapshot.py
--------------------
Read-only, in-memory view of the journal.

Front-ends never hold ORM objects. After every mutation JournalDB reads the
entries_with_tags view, rebuilds each entry with its tag list and swaps the
whole list into an EntrySnapshot in one assignment.

Classes:
    TagRecord: Frozen tag value (id 0 = not yet persisted)
    EntryRecord: Frozen entry value with its ordered tag tuple
    DecodedRow: Result of decoding one view row
    EntrySnapshot: The cached, ordered list of EntryRecords

Functions:
    decode_entry_row: Rebuild one EntryRecord from a view row
    sort_tags: Canonical tag order

Usage:
    tag_map = {tag.id: tag for tag in tags}
    decoded = [decode_entry_row(row, tag_map) for row in rows]
    snapshot.replace(d.entry for d in decoded)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from datetime import datetime
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

# --- Local imports ---
from daybook.core.exceptions import TagDecodeError
from daybook.database.models import TAG_ID_SEPARATOR, as_utc


@dataclass(frozen=True)
class TagRecord:
    """
    A tag as seen by front-ends.

    Attributes:
        id: Database id, or 0 for a tag typed by the user but not stored yet
        tag: Tag text
    """

    id: int
    tag: str

    @classmethod
    def new(cls, text: str) -> "TagRecord":
        """Build an unsaved tag from user input."""
        return cls(id=0, tag=text)

    def __str__(self) -> str:
        return self.tag


def sort_tags(tags: Iterable[TagRecord]) -> Tuple[TagRecord, ...]:
    """Sort tags alphabetically, case-insensitive first, raw text on ties."""
    return tuple(sorted(tags, key=lambda t: (t.tag.casefold(), t.tag)))


@dataclass(frozen=True)
class EntryRecord:
    """
    An entry as seen by front-ends.

    ``tags`` is None when the tag list could not be rebuilt (or, on edit,
    when the tags should be left untouched) and an empty tuple when the
    entry has no tags.

    Use ``dataclasses.replace`` to prepare an edit; the copy only reaches
    the database when passed to JournalDB.edit_entry().
    """

    id: int
    created_at: datetime
    updated_at: datetime
    title: str
    content: str
    tags: Optional[Tuple[TagRecord, ...]] = ()

    @property
    def tag_names(self) -> List[str]:
        """Tag texts in stored order; empty when tags are absent."""
        return [tag.tag for tag in self.tags or ()]

    def __str__(self) -> str:
        return f"{self.id} - {self.title}"


@dataclass(frozen=True)
class DecodedRow:
    """
    Outcome of decoding one entries_with_tags row.

    The entry is always present; ``error`` is set when its tag list could
    not be rebuilt, in which case ``entry.tags`` is None.
    """

    entry: EntryRecord
    error: Optional[TagDecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _decode_tag_ids(
    entry_id: int, raw: Optional[str], tag_map: Mapping[int, TagRecord]
) -> Tuple[TagRecord, ...]:
    if raw is None or raw == "":
        return ()

    tags = []
    for token in str(raw).split(TAG_ID_SEPARATOR):
        token = token.strip()
        if not token.isdigit():
            raise TagDecodeError(entry_id, token, "malformed tag id")
        tag = tag_map.get(int(token))
        if tag is None:
            raise TagDecodeError(entry_id, token, "unknown tag id")
        tags.append(tag)
    return sort_tags(tags)


def decode_entry_row(row: Any, tag_map: Mapping[int, TagRecord]) -> DecodedRow:
    """
    Rebuild an EntryRecord from a row of the entries_with_tags view.

    Args:
        row: Mapping-like row with id, created_at, updated_at, title,
            content and tag_ids
        tag_map: Every stored tag keyed by id

    Returns:
        DecodedRow; on an unknown or malformed tag id the entry keeps its
        other fields, ``tags`` is None and ``error`` explains why
    """
    data = row._mapping if hasattr(row, "_mapping") else row
    entry_id = data["id"]

    error: Optional[TagDecodeError] = None
    tags: Optional[Tuple[TagRecord, ...]]
    try:
        tags = _decode_tag_ids(entry_id, data["tag_ids"], tag_map)
    except TagDecodeError as e:
        tags = None
        error = e

    entry = EntryRecord(
        id=entry_id,
        created_at=as_utc(data["created_at"]),
        updated_at=as_utc(data["updated_at"]),
        title=data["title"] or "",
        content=data["content"] or "",
        tags=tags,
    )
    return DecodedRow(entry=entry, error=error)


class EntrySnapshot:
    """
    Ordered, read-only cache of every entry.

    The list is replaced wholesale; readers holding the previous list keep
    a consistent (if stale) view.
    """

    def __init__(self, entries: Optional[Iterable[EntryRecord]] = None) -> None:
        self._entries: Tuple[EntryRecord, ...] = tuple(entries or ())

    @property
    def entries(self) -> List[EntryRecord]:
        return list(self._entries)

    def replace(self, entries: Iterable[EntryRecord]) -> None:
        """Swap in a freshly loaded list."""
        self._entries = tuple(entries)

    def get(self, entry_id: Any) -> Optional[EntryRecord]:
        """Linear lookup by id; None when absent or id is not an integer."""
        if not isinstance(entry_id, int) or isinstance(entry_id, bool):
            return None
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EntryRecord]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> EntryRecord:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"<EntrySnapshot({len(self._entries)} entries)>"


def tag_records(rows: Sequence[Any]) -> Dict[int, TagRecord]:
    """Build the id → TagRecord map from Tag rows."""
    return {row.id: TagRecord(id=row.id, tag=row.tag) for row in rows}
