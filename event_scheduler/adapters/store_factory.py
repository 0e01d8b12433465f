"""Store factory: creates the persistence adapter named in config."""

from __future__ import annotations

from event_scheduler.config import settings
from event_scheduler.ports.persistence_port import PersistenceAdapter


def create_store(backend: str | None = None) -> PersistenceAdapter:
    """Return the store matching the STORAGE_BACKEND setting.

    Args:
        backend: Overrides the configured backend ("csv", "sqlite", "memory").
    """
    backend = (backend or settings.STORAGE_BACKEND).lower()

    if backend == "csv":
        from event_scheduler.adapters.csv_store import CsvEventStore

        return CsvEventStore(settings.EVENTS_FILE, settings.RECURRING_FILE)

    if backend == "sqlite":
        from event_scheduler.adapters.sqlite_store import SqliteEventStore

        return SqliteEventStore(settings.DATABASE_PATH)

    if backend == "memory":
        from event_scheduler.adapters.memory_store import InMemoryEventStore

        return InMemoryEventStore()

    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")
