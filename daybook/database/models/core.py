"""
Core Models
------------

Central model for the journal database.

Models:
    - Entry: A single journal record (title, content, timestamps, tags)

Timestamps are assigned by the application rather than by database
triggers: both are set on insert and EntryManager.update() refreshes
updated_at explicitly.
"""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import entry_tags
from .base import Base, utc_now

if TYPE_CHECKING:
    from .entities import Tag


class Entry(Base):
    """
    A journal entry.

    Attributes:
        id: Primary key, assigned on insert and never changed
        created_at: When the entry was written (UTC)
        updated_at: When title or content last changed (UTC)
        title: Entry title
        content: Free-form entry body

    Relationships:
        tags: Many-to-many with Tag
    """

    __tablename__ = "entries"

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # ---- Timestamps ----
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    # ---- Many-to-many Relationships ----
    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=entry_tags, back_populates="entries"
    )

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, title={self.title!r})>"

    def __str__(self) -> str:
        return f"{self.id} - {self.title}"
