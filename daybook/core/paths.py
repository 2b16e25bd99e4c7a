#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the daybook project.

User data lives under a single data directory:
    DATA_DIR/
    ├── journal.db     # SQLite journal database
    └── logs/          # Application logs

DATA_DIR defaults to ``~/.daybook`` and can be moved with the
``DAYBOOK_HOME`` environment variable. Every path can also be overridden
per invocation through the CLI options.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path

ENV_HOME = "DAYBOOK_HOME"


def _get_data_dir() -> Path:
    """Resolve the user data directory from the environment."""
    configured = os.environ.get(ENV_HOME)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".daybook"


# ----- Package -----
PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent
MIGRATIONS_DIR = PACKAGE_DIR / "database" / "migrations"

# ----- User data -----
DATA_DIR: Path = _get_data_dir()
DB_PATH = DATA_DIR / "journal.db"
LOG_DIR = DATA_DIR / "logs"
