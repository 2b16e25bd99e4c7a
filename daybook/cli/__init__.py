#!/usr/bin/env python3
"""
daybook CLI
-----------

Command-line interface for the journal.

This module provides the main CLI group and shared context setup
for all commands.

Command Structure:
    - Entries (create, list, show, edit, delete, tags)
    - Setup & Initialization (init)
    - Migration Management (migration)

Usage:
    # Write a new entry
    daybook create

    # Browse
    daybook list
    daybook show 3

    # Use another journal file
    daybook --db-path ~/work.db list
"""
import logging
from pathlib import Path

import click

from daybook.core.cli_utils import setup_logger
from daybook.core.paths import DB_PATH, LOG_DIR
from daybook.database import JournalDB


@click.group()
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    default=str(DB_PATH),
    help="Path to journal database file",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.version_option(package_name="daybook")
@click.pass_context
def cli(ctx: click.Context, db_path: str, log_dir: str, verbose: bool) -> None:
    """daybook - a personal journal in a SQLite file"""

    # Suppress Alembic INFO logging by default
    logging.getLogger("alembic").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path).expanduser()
    ctx.obj["log_dir"] = Path(log_dir).expanduser()
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(ctx.obj["log_dir"], "cli")
    ctx.call_on_close(ctx.obj["logger"].close)


def get_db(ctx: click.Context, initialize: bool = True) -> JournalDB:
    """
    Get or create database instance from context.

    Migration commands pass ``initialize=False`` so the schema is only
    changed by the command itself.
    """
    if "db" not in ctx.obj:
        db = JournalDB(
            db_path=ctx.obj["db_path"],
            log_dir=ctx.obj["log_dir"],
            initialize=initialize,
        )
        ctx.obj["db"] = db
        ctx.find_root().call_on_close(db.close)
    return ctx.obj["db"]


# Import and register command modules
# These imports must come after CLI group definition
from .entries import create, delete, edit, list_entries, show, tags  # noqa: E402
from .setup import init  # noqa: E402
from .migration import migration  # noqa: E402

# Register top-level commands
cli.add_command(create)
cli.add_command(list_entries)
cli.add_command(show)
cli.add_command(edit)
cli.add_command(delete)
cli.add_command(tags)
cli.add_command(init)

# Register command groups
cli.add_command(migration)


if __name__ == "__main__":
    cli(obj={})
