"""
conftest.py
-----------
Shared pytest fixtures for Antiblog tests.

Provides fixtures for:
- Mock profile and temporary SQLite database
- Database sessions and per-concern managers
- Entry payload factories
"""
import random
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from antiblog.core.profile import Profile


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Entry Payload Factories -----

def create_minimal_entry(**overrides):
    """Factory for the smallest valid entry payload (a short-form post)."""
    payload = {"body": "Hello, world", "signature": "sig1"}
    payload.update(overrides)
    return payload


def create_titled_entry(**overrides):
    return create_minimal_entry(**{"title": "Some title", "signature": "sig2", **overrides})


def create_tagged_entry(**overrides):
    return create_minimal_entry(**{"tags": ["stuff"], "signature": "sig3", **overrides})


def create_teased_entry(**overrides):
    """Entry with an explicit summary, hence not short-form."""
    return create_minimal_entry(**{"summary": "Some summary", "signature": "sig4", **overrides})


def create_long_entry(**overrides):
    """Entry whose body exceeds the teaser limit."""
    payload = {"body": "Hello " * 1000, "signature": "sig5"}
    payload.update(overrides)
    return payload


def create_serial_entry(index, **overrides):
    payload = {
        "body": "Hello, world",
        "series": [{"series": "the_story", "index": index}],
        "signature": f"serial{index}",
    }
    payload.update(overrides)
    return payload


def create_redirect_entry(**overrides):
    payload = {"url": "http://example.com", "signature": "sig11"}
    payload.update(overrides)
    return payload


@pytest.fixture
def payloads():
    """Namespace of payload factories."""

    class Payloads:
        minimal = staticmethod(create_minimal_entry)
        titled = staticmethod(create_titled_entry)
        tagged = staticmethod(create_tagged_entry)
        teased = staticmethod(create_teased_entry)
        long = staticmethod(create_long_entry)
        serial = staticmethod(create_serial_entry)
        redirect = staticmethod(create_redirect_entry)

    return Payloads


# ----- Test Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def profile(test_db_path):
    """Mock profile pointing at the temporary database."""
    return Profile.mock_profile(database=f"sqlite:///{test_db_path}")


@pytest.fixture
def test_db(profile):
    """
    Create test database instance with schema.

    Returns an AntiblogDB instance with an initialized schema and a seeded
    random source. Database is torn down after the test.
    """
    from antiblog.database.manager import AntiblogDB

    db = AntiblogDB(profile, rng=random.Random(20240115))
    db.initialize_schema()

    yield db

    db.dispose()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Provides a session with automatic rollback after test.
    """
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def symlink_manager(db_session):
    """Create SymlinkManager instance for testing."""
    from antiblog.database.managers.symlink_manager import SymlinkManager
    return SymlinkManager(db_session)


@pytest.fixture
def tag_manager(db_session):
    """Create TagManager instance for testing."""
    from antiblog.database.managers.tag_manager import TagManager
    return TagManager(db_session)


@pytest.fixture
def series_manager(db_session):
    """Create SeriesManager instance for testing."""
    from antiblog.database.managers.series_manager import SeriesManager
    return SeriesManager(db_session)


@pytest.fixture
def rss_manager(db_session):
    """Create RssManager instance for testing."""
    from antiblog.database.managers.rss_manager import RssManager
    return RssManager(db_session)


@pytest.fixture
def rank_manager(db_session):
    """Create RankManager instance for testing."""
    from antiblog.database.managers.rank_manager import RankManager
    return RankManager(db_session, quiet=True)


@pytest.fixture
def entry_manager(db_session, rng):
    """Create EntryManager instance for testing."""
    from antiblog.database.managers.entry_manager import EntryManager
    return EntryManager(db_session, rng=rng)


@pytest.fixture
def page_manager(db_session):
    """Create PageManager instance for testing."""
    from antiblog.database.managers.page_manager import PageManager
    return PageManager(db_session)


@pytest.fixture
def view_manager(db_session, rng):
    """Create ViewManager instance for testing."""
    from antiblog.database.managers.view_manager import ViewManager
    return ViewManager(db_session, rng=rng)
