#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common CRUD utilities.
All entity managers inherit from this class.

Key Features:
    - Generic get-or-create for lookup tables
    - Shared session and logger handling

Usage:
    class TagManager(BaseManager):
        def get_or_create(self, tag_name: str) -> Tag:
            return self._get_or_create(Tag, {"tag": tag_name})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.orm import Mapped, Session

# --- Local imports ---
from daybook.core.logging_manager import JournalLogger, safe_logger


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base manager providing common CRUD utilities.

    Managers never commit: the caller owns the transaction (see
    JournalDB.session_scope), so a multi-step mutation either lands
    completely or not at all.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[JournalLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    @property
    def log(self) -> JournalLogger:
        """Logger that is safe to call even when none was configured."""
        return safe_logger(self.logger)

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _get_or_create(
        self,
        model_class: Type[T],
        lookup_fields: Dict[str, Any],
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> T:
        """
        Get an existing row from a lookup table or create it.

        Args:
            model_class: ORM model class to query or create
            lookup_fields: Dictionary of field_name: value to filter/create
            extra_fields: Additional fields for new object creation only

        Returns:
            ORM instance of the model class

        Notes:
            The new object is added to the session and flushed immediately
            so its primary key is available. A concurrent duplicate is
            rejected by the table's UNIQUE constraint (IntegrityError).
        """
        obj = self.session.scalars(
            select(model_class).filter_by(**lookup_fields)
        ).first()
        if obj is not None:
            return obj

        fields = lookup_fields.copy()
        if extra_fields:
            fields.update(extra_fields)

        obj = model_class(**fields)
        self.session.add(obj)
        self.session.flush()
        return obj

    # -------------------------------------------------------------------------
    # Generic CRUD Helpers
    # -------------------------------------------------------------------------

    def _get_by_id(self, model_class: Type[T], entity_id: int) -> Optional[T]:
        """Get entity by primary key, or None."""
        return self.session.get(model_class, entity_id)

    def _get_all(self, model_class: Type[T], order_by: Optional[str] = None) -> List[T]:
        """
        Get all entities of a type, optionally ordered by a column name.

        Unknown or computed attribute names are ignored for ordering.
        """
        stmt = select(model_class)
        if order_by and hasattr(model_class, order_by):
            attr = getattr(model_class, order_by)
            if hasattr(attr, "__clause_element__"):
                stmt = stmt.order_by(attr)
        return list(self.session.scalars(stmt).all())

