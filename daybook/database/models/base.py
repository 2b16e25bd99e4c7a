"""
Base Classes
------------

Foundational ORM classes for the journal database.

Classes:
    - Base: Declarative base for all SQLAlchemy models

Functions:
    - utc_now: Timezone-aware current time used for every stored timestamp
    - as_utc: Reattach UTC to naive values read back from SQLite
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone
from typing import Optional

# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation and migrations.
    """

    pass


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to a naive datetime read back from SQLite.

    SQLite stores DateTime columns without offset; every value written by
    this package is UTC, so a naive value is reinterpreted as UTC.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
