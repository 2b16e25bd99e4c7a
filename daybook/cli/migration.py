"""
Migration Management Commands
------------------------------

Database migration commands using Alembic.

Commands:
    - upgrade: Upgrade to a revision
    - downgrade: Downgrade to a revision
    - status: Show migration status
    - history: Show migration history

Usage:
    # Upgrade database to the latest revision
    daybook migration upgrade

    # Downgrade database to a specific revision
    daybook migration downgrade <revision_id>

    # Show current migration status
    daybook migration status
"""
import click

from daybook.core.logging_manager import handle_cli_error
from daybook.core.exceptions import DatabaseError
from . import get_db


@click.group()
@click.pass_context
def migration(ctx: click.Context) -> None:
    """Database migration management (Alembic operations)."""
    pass


@migration.command("upgrade")
@click.option("--revision", default="head", help="Target revision (default: head)")
@click.pass_context
def migration_upgrade(ctx, revision):
    """Upgrade database to specified revision."""
    try:
        click.echo(f"⬆️  Upgrading database to: {revision}")
        db = get_db(ctx, initialize=False)
        db.upgrade_database(revision)
        click.echo("✅ Database upgraded successfully!")

    except DatabaseError as e:
        handle_cli_error(
            ctx,
            e,
            "migration_upgrade",
            additional_context={"revision": revision},
        )


@migration.command("downgrade")
@click.argument("revision")
@click.pass_context
def migration_downgrade(ctx, revision):
    """
    Downgrade database to specified revision.

    Downgrading to base leaves an empty, unversioned file. Migration
    commands leave it that way; any other command (or init) rebuilds the
    schema at head.
    """
    try:
        click.echo(f"⬇️  Downgrading database to: {revision}")
        db = get_db(ctx, initialize=False)
        db.downgrade_database(revision)
        click.echo("✅ Database downgraded successfully!")

    except DatabaseError as e:
        handle_cli_error(
            ctx,
            e,
            "migration_downgrade",
            additional_context={"revision": revision},
        )


@migration.command("status")
@click.pass_context
def migration_status(ctx):
    """Show current migration status."""
    try:
        db = get_db(ctx, initialize=False)
        status = db.get_migration_history()

        click.echo("\n📊 Migration Status")
        click.echo("=" * 50)
        click.echo(f"Current Revision: {status.get('current_revision') or 'None'}")
        click.echo(f"Head Revision: {status.get('head_revision') or 'None'}")
        click.echo(f"Status: {status.get('status', 'Unknown')}")

        if "error" in status:
            click.echo(f"⚠️  Error: {status['error']}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "migration_status")


@migration.command("history")
@click.pass_context
def migration_history(ctx):
    """Show migration history."""
    try:
        db = get_db(ctx, initialize=False)
        status = db.get_migration_history()

        click.echo("\n📜 Migration History")
        click.echo("=" * 50)

        if status.get("history"):
            current = status.get("current_revision")
            for line in status["history"]:
                marker = " (current)" if current and line.startswith(current) else ""
                click.echo(f"  • {line}{marker}")
        else:
            click.echo("  No migrations found")

        if "error" in status:
            click.echo(f"⚠️  Error: {status['error']}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "migration_history")
