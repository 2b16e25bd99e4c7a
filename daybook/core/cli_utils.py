#!/usr/bin/env python3
"""
cli_utils.py
-------------------
Shared CLI utilities for daybook commands.

Functions:
    setup_logger: Initialize JournalLogger for CLI operations
    format_timestamp: Render stored timestamps for terminal output
"""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from daybook.core.logging_manager import JournalLogger


def setup_logger(log_dir: Path, component_name: str) -> JournalLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a JournalLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'cli')

    Returns:
        Configured JournalLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return JournalLogger(operations_log_dir, component_name=component_name)


def format_timestamp(value: datetime) -> str:
    """Render a stored UTC timestamp in local time, minute precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone().strftime("%Y-%m-%d %H:%M")
