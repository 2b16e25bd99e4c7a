#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the daybook project.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all storage-related errors
    │   └── EntryNotFoundError - Edit/delete of an entry id that does not exist
    ├── ValidationError - Data validation failures
    └── TagDecodeError - A view row references a tag id that cannot be resolved

Usage:
    from daybook.core.exceptions import DatabaseError, ValidationError

    try:
        db.create_entry("Title", "Content", ["work"])
    except ValidationError as e:
        logger.error(f"Invalid data: {e}")
    except DatabaseError as e:
        logger.error(f"Database operation failed: {e}")
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when the journal database cannot be opened or initialized,
    or when a statement fails (malformed SQL, constraint violation).
    No automatic retry is attempted.

    Examples:
        >>> raise DatabaseError("Database initialization failed: unable to open file")
        >>> raise DatabaseError("Data integrity violation: UNIQUE constraint failed")
    """

    pass


class EntryNotFoundError(DatabaseError):
    """
    Exception for operations addressed to an entry id that is not stored.

    Attributes:
        entry_id: The id that could not be found

    Examples:
        >>> raise EntryNotFoundError(42)
    """

    def __init__(self, entry_id: int) -> None:
        self.entry_id = entry_id
        super().__init__(f"Entry with id {entry_id} not found")


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Empty tag text
    - Entry without a persisted id passed to edit/delete
    - Missing required fields

    Examples:
        >>> raise ValidationError("Tag cannot be empty")
    """

    pass


class TagDecodeError(Exception):
    """
    Exception for tag-list reconstruction failures on the read path.

    Raised while decoding one row of the entries_with_tags view when a
    tag id token is malformed or not present in the tag lookup map.

    Attributes:
        entry_id: Entry whose tag list could not be rebuilt
        token: Offending token from the colon-delimited id list
    """

    def __init__(self, entry_id: int, token: str, reason: str) -> None:
        self.entry_id = entry_id
        self.token = token
        super().__init__(f"Entry {entry_id}: {reason} ({token!r})")
