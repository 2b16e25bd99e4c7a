#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the daybook journal.

Provides the JournalDB class, the single entry point front-ends use to
read and change the journal.

Handles:
    - Engine and session factory setup (SQLite, foreign keys enforced)
    - Schema creation and Alembic versioning
    - Transactional entry create/edit/delete
    - The in-memory entry snapshot served to front-ends

Control flow of every mutation:
    front-end call -> managers change tables inside one session_scope
    -> commit -> reload_snapshot() -> front-end reads list_entries()

Core Operations:
    Entries:
        - create_entry: Insert an entry with its tags
        - edit_entry: Update title/content and optionally the tag set
        - delete_entry: Remove an entry and prune orphan tags
        - list_entries / get_entry_by_id: Read from the snapshot

    Tags:
        - get_tag_usage: Tags with usage counts

    Schema:
        - initialize_schema: Create or upgrade, idempotent
        - upgrade_database / downgrade_database
        - get_migration_history

Notes
==============
- All timestamps are written in UTC by the application
- Managers never commit; session_scope does
- Values returned to callers are frozen records, never ORM objects
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

# --- Third party ---
from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import Engine, create_engine, event, inspect, select, text
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from daybook.core.exceptions import DatabaseError, ValidationError
from daybook.core.logging_manager import JournalLogger, safe_logger
from daybook.core.paths import MIGRATIONS_DIR
from .decorators import DatabaseOperation, handle_db_errors, log_database_operation
from .managers import EntryManager, TagManager
from .models import (
    CREATE_ENTRIES_WITH_TAGS,
    Base,
    Tag,
    entries_with_tags,
)
from .snapshot import (
    EntryRecord,
    EntrySnapshot,
    TagRecord,
    decode_entry_row,
    tag_records,
)

EntryRef = Union[EntryRecord, int]


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on SQLite foreign key enforcement for a new DBAPI connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _tag_texts(tags: Optional[Iterable[Any]]) -> Optional[List[str]]:
    """Accept tag texts or TagRecords; None stays None."""
    if tags is None:
        return None
    return [tag.tag if isinstance(tag, TagRecord) else str(tag) for tag in tags]


def _entry_id(entry: EntryRef) -> int:
    if isinstance(entry, EntryRecord):
        entry_id = entry.id
    else:
        entry_id = entry
    if not isinstance(entry_id, int) or isinstance(entry_id, bool) or entry_id <= 0:
        raise ValidationError(f"Entry must be persisted (got id {entry_id!r})")
    return entry_id


# ----- Main Database Manager -----
class JournalDB:
    """
    Main database manager for the journal.

    Attributes:
        db_path: Filesystem path to the SQLite database file
        migrations_dir: Alembic script directory
        engine: SQLAlchemy engine instance
        SessionLocal: SQLAlchemy session factory
        snapshot: Cached, ordered list of every entry

    Usage:
        with JournalDB("~/.daybook/journal.db") as db:
            entry = db.create_entry("Monday", "Slept well.", ["sleep"])
            for e in db.list_entries():
                print(e)
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path],
        migrations_dir: Union[str, Path] = MIGRATIONS_DIR,
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[JournalLogger] = None,
        initialize: bool = True,
    ) -> None:
        """
        Open (creating if needed) the journal database.

        Args:
            db_path: Path to the SQLite file
            migrations_dir: Alembic script directory
            log_dir: Directory for log files; ignored when logger is given
            logger: Pre-built logger to share with the caller
            initialize: Run initialize_schema() on open. Migration tooling
                passes False so an unversioned database is left as it is

        Raises:
            DatabaseError: If the database cannot be opened or initialized
        """
        self.db_path = Path(db_path).expanduser().resolve()
        self.migrations_dir = Path(migrations_dir).expanduser().resolve()

        # --- Logging ---
        self._owns_logger = False
        if logger is not None:
            self.logger: Optional[JournalLogger] = logger
        elif log_dir:
            self.logger = JournalLogger(
                Path(log_dir).expanduser().resolve() / "system",
                component_name="database",
            )
            self._owns_logger = True
        else:
            self.logger = None

        self.snapshot = EntrySnapshot()

        # Lazy-loaded in session_scope
        self._tag_manager: Optional[TagManager] = None
        self._entry_manager: Optional[EntryManager] = None

        if self._setup_engine(initialize):
            self.reload_snapshot()

    @property
    def log(self) -> JournalLogger:
        return safe_logger(self.logger)

    def _setup_engine(self, initialize: bool = True) -> bool:
        """
        Initialize engine, session factory, Alembic config and schema.

        Returns True when the schema is in place (always, unless
        ``initialize`` is False and the database carries no revision).
        """
        try:
            self.log.log_operation(
                "database_init_start",
                {
                    "db_path": str(self.db_path),
                    "migrations_dir": str(self.migrations_dir),
                },
            )

            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
            )
            event.listen(self.engine, "connect", _enable_foreign_keys)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            self.alembic_cfg: Config = self._setup_alembic()
            if initialize:
                self.initialize_schema()
                schema_ready = True
            else:
                schema_ready = self._current_revision() is not None

            self.log.log_operation(
                "database_init_complete",
                {"success": True, "schema_ready": schema_ready},
            )
            return schema_ready

        except DatabaseError:
            raise
        except Exception as e:
            self.log.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around a unit of work.

        Managers are reachable as ``db.entries`` and ``db.tags`` while the
        scope is open. Commits on success, rolls back on any exception.

        Usage:
            with db.session_scope():
                db.tags.get_or_create("python")
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        self._entry_manager = EntryManager(session, self.logger)
        self._tag_manager = self._entry_manager.tags

        self.log.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            self.log.log_debug("session_commit", {"session_id": session_id})
        except Exception as e:
            session.rollback()
            self.log.log_error(
                e, {"operation": "session_rollback", "session_id": session_id}
            )
            raise
        finally:
            self._entry_manager = None
            self._tag_manager = None
            session.close()
            self.log.log_debug("session_close", {"session_id": session_id})

    @property
    def tags(self) -> TagManager:
        """
        Access TagManager for tag operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._tag_manager is None:
            raise DatabaseError(
                "TagManager requires active session. Use within session_scope."
            )
        return self._tag_manager

    @property
    def entries(self) -> EntryManager:
        """
        Access EntryManager for entry operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._entry_manager is None:
            raise DatabaseError(
                "EntryManager requires active session. Use within session_scope."
            )
        return self._entry_manager

    # ---- Alembic setup ----
    def _setup_alembic(self) -> Config:
        """Build the Alembic configuration in code (no ini file)."""
        try:
            alembic_cfg = Config()
            alembic_cfg.set_main_option("script_location", str(self.migrations_dir))
            alembic_cfg.set_main_option("sqlalchemy.url", f"sqlite:///{self.db_path}")
            return alembic_cfg
        except Exception as e:
            self.log.log_error(e, {"operation": "setup_alembic"})
            raise DatabaseError(f"Alembic configuration failed: {e}") from e

    def _run_alembic(self, fn: Callable[..., Any], *args: Any) -> None:
        """Run an Alembic command over a connection of our own engine."""
        with self.engine.begin() as connection:
            self.alembic_cfg.attributes["connection"] = connection
            try:
                fn(self.alembic_cfg, *args)
            finally:
                self.alembic_cfg.attributes.pop("connection", None)

    def _current_revision(self) -> Optional[str]:
        with self.engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()

    def _create_views(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(text(CREATE_ENTRIES_WITH_TAGS))

    @handle_db_errors
    @log_database_operation("initialize_schema")
    def initialize_schema(self) -> None:
        """
        Make sure every table and the entries_with_tags view exist.

        Actions:
            If the database has no Alembic revision (fresh, or created
            before versioning),
                creates missing tables from the ORM models
                creates the view
                stamps the Alembic revision to head
            If not,
                runs pending migrations and re-creates the view if missing

        Safe to call on every startup.
        """
        try:
            with self.engine.connect() as conn:
                table_names = inspect(conn).get_table_names()
            current_rev = self._current_revision()

            if current_rev is None:
                Base.metadata.create_all(bind=self.engine)
                self._create_views()
                self._run_alembic(command.stamp, "head")
                self.log.log_operation(
                    "fresh_database_created",
                    {
                        "existing_tables": len(table_names),
                        "tables": len(Base.metadata.tables),
                    },
                )
            else:
                self._run_alembic(command.upgrade, "head")
                self._create_views()
                self.log.log_operation(
                    "existing_database_migrated",
                    {"from_revision": current_rev},
                )
        except Exception as e:
            raise DatabaseError(f"Database initialization failed: {e}") from e

    @handle_db_errors
    @log_database_operation("upgrade_database")
    def upgrade_database(self, revision: str = "head") -> None:
        """
        Upgrade the database schema to the specified Alembic revision.

        Args:
            revision: Target revision (default: latest)
        """
        try:
            self._run_alembic(command.upgrade, revision)
        except Exception as e:
            raise DatabaseError(f"Database upgrade failed: {e}") from e
        self.reload_snapshot()

    @handle_db_errors
    @log_database_operation("downgrade_database")
    def downgrade_database(self, revision: str) -> None:
        """
        Downgrade the database schema to a specified Alembic revision.

        Downgrading below the initial revision drops every table; the
        snapshot is emptied in that case.
        """
        try:
            self._run_alembic(command.downgrade, revision)
        except Exception as e:
            raise DatabaseError(f"Database downgrade to {revision} failed: {e}") from e

        if self._current_revision() is None:
            self.snapshot.replace([])
        else:
            self.reload_snapshot()

    def get_migration_history(self) -> Dict[str, Any]:
        """
        Get the migration status and known revisions.

        Returns:
            Dictionary with keys:
                - 'current_revision': Current Alembic revision (or None)
                - 'head_revision': Latest revision in the scripts
                - 'status': 'up_to_date' or 'needs_migration'
                - 'history': ["<rev>: <message>", ...] newest first
                - 'error': Present if an exception occurred
        """
        try:
            script = ScriptDirectory.from_config(self.alembic_cfg)
            head = script.get_current_head()
            current = self._current_revision()
            history = [
                f"{rev.revision}: {rev.doc}" for rev in script.walk_revisions()
            ]
            return {
                "current_revision": current,
                "head_revision": head,
                "status": "up_to_date" if current == head else "needs_migration",
                "history": history,
            }
        except Exception as e:
            self.log.log_error(e, {"operation": "get_migration_history"})
            return {"error": str(e)}

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def reload_snapshot(self) -> None:
        """
        Rebuild the in-memory snapshot from the entries_with_tags view.

        Entries whose tag ids cannot be resolved are kept with tags set to
        None; each one is logged as a warning.
        """
        view = entries_with_tags
        stmt = select(view).order_by(view.c.created_at.desc(), view.c.id.desc())

        with DatabaseOperation(self.logger, "reload_snapshot"):
            with self.engine.connect() as conn:
                tag_map = tag_records(conn.execute(select(Tag.id, Tag.tag)).all())
                rows = conn.execute(stmt).all()

        decoded = [decode_entry_row(row, tag_map) for row in rows]
        for result in decoded:
            if not result.ok:
                self.log.log_warning(
                    "Could not rebuild entry tags",
                    {
                        "entry_id": result.error.entry_id,
                        "token": result.error.token,
                        "reason": str(result.error),
                    },
                )

        self.snapshot.replace(result.entry for result in decoded)

    # -------------------------------------------------------------------------
    # Entry Operations
    # -------------------------------------------------------------------------

    def create_entry(
        self,
        title: str,
        content: str,
        tags: Optional[Iterable[Union[str, TagRecord]]] = None,
    ) -> EntryRecord:
        """
        Store a new entry and its tags in one transaction.

        Args:
            title: Entry title
            content: Entry body
            tags: Tag texts or TagRecords; missing tags are created

        Returns:
            The stored entry as read back from the refreshed snapshot
        """
        with self.session_scope():
            entry = self.entries.create(title, content, _tag_texts(tags))
            entry_id = entry.id

        self.reload_snapshot()
        record = self.snapshot.get(entry_id)
        if record is None:
            raise DatabaseError(f"Entry {entry_id} missing after create")
        return record

    def edit_entry(self, entry: EntryRecord) -> EntryRecord:
        """
        Write an edited copy of an entry back.

        Title and content are always written and updated_at refreshed.
        ``entry.tags`` replaces the stored tag set unless it is None.

        Raises:
            EntryNotFoundError: If entry.id is not stored
        """
        entry_id = _entry_id(entry)
        with self.session_scope():
            self.entries.update(
                entry_id,
                entry.title,
                entry.content,
                _tag_texts(entry.tags),
            )

        self.reload_snapshot()
        record = self.snapshot.get(entry_id)
        if record is None:
            raise DatabaseError(f"Entry {entry_id} missing after edit")
        return record

    def delete_entry(self, entry: EntryRef) -> None:
        """
        Delete an entry (record or id) and prune tags nobody uses anymore.

        Raises:
            EntryNotFoundError: If the id is not stored
        """
        entry_id = _entry_id(entry)
        with self.session_scope():
            self.entries.delete(entry_id)
        self.reload_snapshot()

    def list_entries(self) -> List[EntryRecord]:
        """Every entry, newest first (ties by id, highest first)."""
        return self.snapshot.entries

    def get_entry_by_id(self, entry_id: Any) -> Optional[EntryRecord]:
        """Look up an entry in the snapshot; None when absent."""
        return self.snapshot.get(entry_id)

    # -------------------------------------------------------------------------
    # Tag Operations
    # -------------------------------------------------------------------------

    def get_tag_usage(self) -> List[Tuple[TagRecord, int]]:
        """Every tag with its entry count, most used first."""
        with self.session_scope():
            return [
                (TagRecord(id=tag.id, tag=tag.tag), count)
                for tag, count in self.tags.get_with_counts()
            ]

    # ---- Lifecycle ----
    def close(self) -> None:
        """Dispose the engine and close a logger this instance created."""
        self.engine.dispose()
        if self._owns_logger and self.logger is not None:
            self.logger.close()

    def __enter__(self) -> "JournalDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<JournalDB(db_path={str(self.db_path)!r}, entries={len(self.snapshot)})>"
