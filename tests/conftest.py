"""Shared test fixtures and configuration.

Sets up environment variables so event_scheduler.config never points at
real files, and provides common fixtures like stores and a catalog.
"""

import os

# Patch env vars BEFORE any event_scheduler imports
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("ROLLBACK_ON_SAVE_FAILURE", "false")
os.environ.setdefault("DATABASE_PATH", ":memory:")

import pytest


@pytest.fixture
def memory_store():
    """Return an empty in-memory store."""
    from event_scheduler.adapters.memory_store import InMemoryEventStore
    return InMemoryEventStore()


@pytest.fixture
def catalog(memory_store):
    """Return an EventCatalog over an empty in-memory store."""
    from event_scheduler.core.catalog import EventCatalog
    return EventCatalog(memory_store, rollback_on_save_failure=False)


@pytest.fixture
def csv_store(tmp_path):
    """Return a CsvEventStore backed by temp files."""
    from event_scheduler.adapters.csv_store import CsvEventStore
    return CsvEventStore(
        events_path=str(tmp_path / "events.csv"),
        recurring_path=str(tmp_path / "recurrent.csv"),
    )


@pytest.fixture
def sqlite_store(tmp_path):
    """Return a SqliteEventStore backed by a temp file."""
    from event_scheduler.adapters.sqlite_store import SqliteEventStore
    return SqliteEventStore(db_path=str(tmp_path / "test_events.db"))


@pytest.fixture
def backup_path(tmp_path):
    return str(tmp_path / "backup.txt")
