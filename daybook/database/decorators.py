#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators and context managers for database operations.

- log_database_operation: timing/outcome logging around manager methods
- handle_db_errors: SQLAlchemy exceptions → DatabaseError
- DatabaseOperation: both of the above for a ``with`` block
"""
from __future__ import annotations

from datetime import datetime
from functools import wraps
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from daybook.core.exceptions import DatabaseError
from daybook.core.logging_manager import JournalLogger, safe_logger


def log_database_operation(operation_name: str):
    """
    Decorator to log database operations with timing and context.

    The wrapped callable must be a method of an object exposing an
    optional ``logger`` attribute.

    Args:
        operation_name: Name of the operation being logged
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = safe_logger(getattr(self, "logger", None))
            start_time = datetime.now()
            operation_id = f"{operation_name}_{start_time.strftime('%Y%m%d_%H%M%S_%f')}"

            logger.log_debug(
                f"Starting {operation_name}",
                {
                    "operation_id": operation_id,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                logger.log_error(
                    e,
                    {
                        "operation": operation_name,
                        "operation_id": operation_id,
                        "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    },
                )
                raise

            logger.log_operation(
                f"{operation_name}_completed",
                {
                    "operation_id": operation_id,
                    "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    "success": True,
                },
            )
            return result

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Decorator to translate SQLAlchemy errors into DatabaseError.

    Our own exceptions pass through untouched.
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise DatabaseError(f"Data integrity violation: {e}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database operation failed: {e}") from e

    return wrapper


class DatabaseOperation:
    """
    Context manager combining error translation and operation logging.

    Usage:
        with DatabaseOperation(self.logger, "reload_snapshot"):
            rows = session.execute(stmt).all()
    """

    def __init__(self, logger: Optional[JournalLogger], operation_name: str) -> None:
        self.logger = safe_logger(logger)
        self.operation_name = operation_name
        self._start: Optional[datetime] = None

    def __enter__(self) -> "DatabaseOperation":
        self._start = datetime.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        duration = (datetime.now() - self._start).total_seconds()

        if exc_val is None:
            self.logger.log_operation(
                f"{self.operation_name}_completed",
                {"duration_seconds": duration, "success": True},
            )
            return False

        self.logger.log_error(
            exc_val,
            {"operation": self.operation_name, "duration_seconds": duration},
        )
        if isinstance(exc_val, IntegrityError):
            raise DatabaseError(f"Data integrity violation: {exc_val}") from exc_val
        if isinstance(exc_val, SQLAlchemyError):
            raise DatabaseError(f"Database operation failed: {exc_val}") from exc_val
        return False
