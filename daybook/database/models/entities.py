"""
Entity Models
-------------

Models:
    - Tag: Keyword label, unique by text, shared between entries
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import entry_tags
from .base import Base

if TYPE_CHECKING:
    from .core import Entry


class Tag(Base):
    """
    Keyword tags for entries.

    The UNIQUE constraint on ``tag`` is what keeps get-or-create from ever
    producing duplicates; application-level lookups are only a fast path.

    Attributes:
        id: Primary key
        tag: The tag text (unique, non-empty)

    Relationships:
        entries: Many-to-many with Entry
    """

    __tablename__ = "tags"
    __table_args__ = (CheckConstraint("tag != ''", name="ck_non_empty_tag"),)

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tag: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )

    # ---- Relationships ----
    entries: Mapped[List["Entry"]] = relationship(
        "Entry", secondary=entry_tags, back_populates="tags"
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, tag={self.tag!r})>"

    def __str__(self) -> str:
        return self.tag
