"""
Entry Commands
--------------

Write, browse and remove journal entries.

Commands:
    - create: Write a new entry (prompts for whatever is not given)
    - list: One line per entry, newest first
    - show: Print a single entry
    - edit: Change title, content and tags of an entry
    - delete: Remove an entry
    - tags: List tags with usage counts

User mistakes (bad id, unknown id, aborted editor) are reported as plain
messages; only storage failures end with a non-zero exit code.
"""
import dataclasses
from datetime import datetime
from typing import Optional

import click

from daybook.core.exceptions import DatabaseError, EntryNotFoundError
from daybook.core.cli_utils import format_timestamp
from daybook.core.logging_manager import handle_cli_error
from daybook.core.validators import DataValidator
from daybook.database import EntryRecord, JournalDB, TagRecord
from . import get_db

TAGS_PROMPT = "Enter tags separated by comma"


def default_title() -> str:
    """Title offered for a new entry, e.g. '18-10-2026 Entry'."""
    return f"{datetime.now().strftime('%d-%m-%Y')} Entry"


def _parse_entry_id(raw: str) -> Optional[int]:
    entry_id = DataValidator.normalize_int(raw)
    if entry_id is None or entry_id <= 0:
        click.echo("Entry id must be a number")
        return None
    return entry_id


def select_entry(db: JournalDB, raw_id: Optional[str]) -> Optional[EntryRecord]:
    """
    Resolve the entry a command should act on.

    With an id, looks it up directly; without one, lists every entry with a
    number and prompts for a choice. Problems are echoed and None returned.
    """
    if raw_id is not None:
        entry_id = _parse_entry_id(raw_id)
        if entry_id is None:
            return None
        entry = db.get_entry_by_id(entry_id)
        if entry is None:
            click.echo(f"Entry with id {entry_id} not found")
        return entry

    entries = db.list_entries()
    if not entries:
        click.echo("No entries found")
        return None

    for index, entry in enumerate(entries, start=1):
        click.echo(f"  {index}) {entry.title}")
    choice = click.prompt(
        "Select entry",
        type=click.IntRange(1, len(entries)),
        default=1,
    )
    return entries[choice - 1]


@click.command()
@click.option("--title", help="Entry title")
@click.option("--content", help="Entry body (opens $EDITOR when omitted)")
@click.option("--tags", "tag_text", help="Comma-separated tags")
@click.pass_context
def create(ctx, title, content, tag_text):
    """Create a new entry."""
    try:
        db = get_db(ctx)

        if title is None:
            title = click.prompt("Enter entry title", default=default_title())

        if content is None:
            content = click.edit("")
            if content is None:
                click.echo("Entry not saved")
                return

        if tag_text is None:
            tag_text = click.prompt(TAGS_PROMPT, default="", show_default=False)

        entry = db.create_entry(title, content, DataValidator.parse_tag_list(tag_text))
        click.echo(f"Entry [{entry.id} - {entry.title}] created")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "create")


@click.command("list")
@click.pass_context
def list_entries(ctx):
    """List all entries, newest first."""
    try:
        db = get_db(ctx)
        entries = db.list_entries()
        if not entries:
            click.echo("No entries found")
            return
        for entry in entries:
            click.echo(f"{entry.id} - {entry.title}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "list")


@click.command()
@click.argument("entry_id")
@click.pass_context
def delete(ctx, entry_id):
    """Delete the entry with ENTRY_ID."""
    try:
        db = get_db(ctx)

        parsed = _parse_entry_id(entry_id)
        if parsed is None:
            return

        entry = db.get_entry_by_id(parsed)
        if entry is None:
            click.echo(f"Entry with id {parsed} not found")
            return

        try:
            db.delete_entry(entry)
        except EntryNotFoundError:
            click.echo(f"Entry with id {parsed} not found")
            return

        click.echo(f"Entry [{entry.id} - {entry.title}] deleted")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "delete", additional_context={"entry_id": entry_id})


@click.command()
@click.argument("entry_id", required=False)
@click.pass_context
def show(ctx, entry_id):
    """Show an entry (choose from a list when ENTRY_ID is omitted)."""
    try:
        db = get_db(ctx)
        entry = select_entry(db, entry_id)
        if entry is None:
            return

        click.echo(f"Title:\n{entry.title}\n")
        click.echo(f"Content:\n{entry.content}\n")
        click.echo(f"Tags:\n{','.join(entry.tag_names)}\n")
        click.echo(f"Created:\n{format_timestamp(entry.created_at)}")
        click.echo(f"Updated:\n{format_timestamp(entry.updated_at)}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "show", additional_context={"entry_id": entry_id})


@click.command()
@click.argument("entry_id", required=False)
@click.option("--title", help="New title")
@click.option("--content", help="New body (opens $EDITOR when omitted)")
@click.option("--tags", "tag_text", help="New comma-separated tag set")
@click.pass_context
def edit(ctx, entry_id, title, content, tag_text):
    """Edit an entry (choose from a list when ENTRY_ID is omitted)."""
    try:
        db = get_db(ctx)
        entry = select_entry(db, entry_id)
        if entry is None:
            return

        if title is None:
            title = click.prompt("Enter entry title", default=entry.title)

        if content is None:
            edited = click.edit(entry.content)
            content = entry.content if edited is None else edited

        current_tags = ",".join(entry.tag_names)
        if tag_text is None:
            tag_text = click.prompt(
                TAGS_PROMPT,
                default=current_tags,
                show_default=bool(current_tags),
            )

        if entry.tags is None and tag_text == current_tags:
            # Stored tags could not be read back; leave them alone
            new_tags = None
        else:
            new_tags = tuple(
                TagRecord.new(name) for name in DataValidator.parse_tag_list(tag_text)
            )

        updated = db.edit_entry(
            dataclasses.replace(entry, title=title, content=content, tags=new_tags)
        )
        click.echo(f"Entry [{updated.id} - {updated.title}] updated")

    except EntryNotFoundError as e:
        click.echo(str(e))
    except DatabaseError as e:
        handle_cli_error(ctx, e, "edit", additional_context={"entry_id": entry_id})


@click.command()
@click.pass_context
def tags(ctx):
    """List tags with the number of entries using each."""
    try:
        db = get_db(ctx)
        usage = db.get_tag_usage()
        if not usage:
            click.echo("No tags found")
            return
        for tag, count in usage:
            click.echo(f"{tag.tag} ({count})")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "tags")
