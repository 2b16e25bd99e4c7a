"""
Setup & Initialization Commands
--------------------------------

Commands:
    - init: Create the journal database (or bring it to the latest schema)
"""
import click

from daybook.core.logging_manager import handle_cli_error
from daybook.core.exceptions import DatabaseError
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the journal database."""
    try:
        click.echo("🗄️  Initializing database schema...")
        db = get_db(ctx)
        db.initialize_schema()
        click.echo(f"✅ Database ready: {db.db_path}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")
