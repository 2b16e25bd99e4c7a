#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for journal operations.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value.

        Args:
            value: Value to normalize

        Returns:
            Stripped string, or None for empty/whitespace-only input
        """
        if value is None or not str(value).strip():
            return None
        return str(value).strip()

    @staticmethod
    def normalize_tag_names(values: Iterable[Any]) -> List[str]:
        """
        Normalize a sequence of tag names.

        Empty and whitespace-only names are dropped and duplicates collapsed,
        keeping the first occurrence. Case is preserved.
        """
        seen = set()
        names = []
        for value in values:
            name = DataValidator.normalize_string(value)
            if name is None or name in seen:
                continue
            seen.add(name)
            names.append(name)
        return names

    @staticmethod
    def parse_tag_list(raw: Optional[str], separator: str = ",") -> List[str]:
        """
        Split a user-typed tag string into normalized tag names.

        Examples:
            >>> DataValidator.parse_tag_list("work, ideas,,work")
            ['work', 'ideas']
        """
        if not raw:
            return []
        return DataValidator.normalize_tag_names(raw.split(separator))

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer safely.

        Returns:
            Integer value or None if conversion fails
        """
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(str(value).strip())
        except ValueError:
            return None
