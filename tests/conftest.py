"""
conftest.py
-----------
Shared pytest fixtures for daybook tests.

Provides fixtures for:
- Temporary directories and database paths
- A JournalDB with an initialized schema
- Session-bound entity managers
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


# ----- Test Database Fixtures -----

@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Returns a JournalDB instance with an initialized schema.
    The engine is disposed after the test.
    """
    from daybook.database.manager import JournalDB

    db = JournalDB(db_path=test_db_path)

    yield db

    db.close()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Managers built on this session share its transaction, which is rolled
    back after the test.
    """
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def entry_manager(db_session):
    """Create EntryManager instance for testing."""
    from daybook.database.managers.entry_manager import EntryManager
    return EntryManager(db_session)


@pytest.fixture
def tag_manager(db_session):
    """Create TagManager instance for testing."""
    from daybook.database.managers.tag_manager import TagManager
    return TagManager(db_session)
