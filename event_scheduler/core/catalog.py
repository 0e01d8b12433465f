"""
Event Scheduler - Event Catalog.

Owns the in-memory events and recurrence specs, allocates ids and writes
every successful change through to the injected store.

All mutations run under one lock, so a reader never sees a half-expanded
recurring series. Reads hand out copies: callers can't reach the
catalog's own objects.
"""

from __future__ import annotations

import copy
import logging
import threading
from datetime import date, datetime

from event_scheduler.adapters.backup_file import merge_backup, read_backup_file, write_backup_file
from event_scheduler.core import conflict_checker
from event_scheduler.core.recurrence import generate_recurrence
from event_scheduler.data.models import (
    Event,
    Interval,
    RecurrenceSpec,
    ValidationError,
    validate_times,
)
from event_scheduler.ports.persistence_port import PersistenceAdapter

logger = logging.getLogger(__name__)

_Checkpoint = tuple[list[Event], list[RecurrenceSpec], int]


class EventCatalog:
    """Event CRUD, recurrence creation and queries over one store."""

    def __init__(
        self,
        store: PersistenceAdapter,
        rollback_on_save_failure: bool | None = None,
    ) -> None:
        if rollback_on_save_failure is None:
            from event_scheduler.config import settings
            rollback_on_save_failure = settings.ROLLBACK_ON_SAVE_FAILURE

        self._store = store
        self._rollback_on_save_failure = rollback_on_save_failure
        self._lock = threading.RLock()
        self._events: list[Event] = []
        self._specs: list[RecurrenceSpec] = []
        self._next_id = 1
        self._load()

    # ------------------------------------------------------------------
    # Internal state handling (callers hold the lock)
    # ------------------------------------------------------------------

    def _load(self) -> None:
        self._events = self._store.load_events()
        self._specs = self._store.load_recurrences()
        self._update_next_id()
        logger.info(
            "Catalog loaded: %d events, %d recurrences",
            len(self._events), len(self._specs),
        )

    def _update_next_id(self) -> None:
        """max(id) + 1, or 1 for an empty catalog."""
        self._next_id = max((e.id for e in self._events), default=0) + 1

    def _index_of(self, event_id: int) -> int | None:
        for i, event in enumerate(self._events):
            if event.id == event_id:
                return i
        return None

    def _insert(self, title: str, description: str, start: datetime, end: datetime) -> Event:
        event = Event(
            id=self._next_id,
            title=title,
            description=description,
            start=start,
            end=end,
        )
        self._next_id += 1
        self._events.append(event)
        return event

    def _checkpoint(self) -> _Checkpoint:
        return (
            [copy.copy(e) for e in self._events],
            list(self._specs),
            self._next_id,
        )

    def _restore(self, checkpoint: _Checkpoint) -> None:
        self._events, self._specs, self._next_id = checkpoint

    def _write_through(self, checkpoint: _Checkpoint) -> bool:
        """Persist everything. Returns False only if the change was rolled back."""
        saved = self._store.save_events(self._events)
        saved = self._store.save_recurrences(self._specs) and saved
        if saved:
            return True

        if self._rollback_on_save_failure:
            self._restore(checkpoint)
            logger.error("Write-through failed, change rolled back")
            return False

        logger.error("Write-through failed, keeping in-memory change")
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self, title: str, description: str, start: datetime, end: datetime,
    ) -> Event | None:
        """Create a single event. Returns None if end is not after start."""
        try:
            validate_times(start, end)
        except ValidationError as exc:
            logger.warning("Event '%s' rejected: %s", title, exc)
            return None

        with self._lock:
            checkpoint = self._checkpoint()
            event = self._insert(title, description, start, end)
            if not self._write_through(checkpoint):
                return None
            logger.info("Event created: #%d '%s'", event.id, title)
            return copy.copy(event)

    def create_recurring(
        self,
        title: str,
        description: str,
        start: datetime,
        end: datetime,
        interval: str | Interval,
        occurrence_count: int | None = None,
        end_date: date | None = None,
    ) -> list[int]:
        """Create an anchor event and expand its recurrence.

        Raises ParseError for a malformed interval token, before anything
        is stored. Returns the ids of the whole series (anchor first), or
        an empty list if the times or termination condition are invalid.
        """
        if not isinstance(interval, Interval):
            interval = Interval.parse(interval)

        try:
            validate_times(start, end)
        except ValidationError as exc:
            logger.warning("Recurring event '%s' rejected: %s", title, exc)
            return []

        with self._lock:
            try:
                spec = RecurrenceSpec(
                    event_id=self._next_id,
                    interval=interval,
                    occurrence_count=occurrence_count,
                    end_date=end_date,
                )
            except ValidationError as exc:
                logger.warning("Recurring event '%s' rejected: %s", title, exc)
                return []

            checkpoint = self._checkpoint()
            try:
                anchor = self._insert(title, description, start, end)
                self._specs.append(spec)
                ids = generate_recurrence(anchor, spec, self._insert)
            except Exception:
                self._restore(checkpoint)
                raise

            if not self._write_through(checkpoint):
                return []
            return ids

    def update(
        self,
        event_id: int,
        title: str,
        description: str,
        start: datetime,
        end: datetime,
    ) -> bool:
        """Overwrite an event's fields in place. Siblings are never touched."""
        try:
            validate_times(start, end)
        except ValidationError as exc:
            logger.warning("Update of event #%d rejected: %s", event_id, exc)
            return False

        with self._lock:
            index = self._index_of(event_id)
            if index is None:
                logger.info("Update skipped: event #%d not found", event_id)
                return False

            checkpoint = self._checkpoint()
            event = self._events[index]
            event.title = title
            event.description = description
            event.start = start
            event.end = end
            if not self._write_through(checkpoint):
                return False
            logger.info("Event #%d updated", event_id)
            return True

    def delete(self, event_id: int) -> bool:
        """Delete one event and any recurrence anchored at it."""
        with self._lock:
            index = self._index_of(event_id)
            if index is None:
                logger.info("Delete skipped: event #%d not found", event_id)
                return False

            checkpoint = self._checkpoint()
            del self._events[index]
            self._specs = [s for s in self._specs if s.event_id != event_id]
            self._update_next_id()
            if not self._write_through(checkpoint):
                return False
            logger.info("Event #%d deleted", event_id)
            return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def next_event_id(self) -> int:
        with self._lock:
            return self._next_id

    def find(self, event_id: int) -> Event | None:
        with self._lock:
            index = self._index_of(event_id)
            if index is None:
                return None
            return copy.copy(self._events[index])

    def find_recurrence(self, event_id: int) -> RecurrenceSpec | None:
        """Recurrence spec anchored at event_id, if any."""
        with self._lock:
            for spec in self._specs:
                if spec.event_id == event_id:
                    return copy.copy(spec)
        return None

    def list(self) -> list[Event]:
        """Snapshot of all events, in insertion order."""
        with self._lock:
            return [copy.copy(e) for e in self._events]

    def list_recurrences(self) -> list[RecurrenceSpec]:
        with self._lock:
            return [copy.copy(s) for s in self._specs]

    def search_by_date(self, day: date) -> list[Event]:
        return conflict_checker.search_by_date(self.list(), day)

    def search_by_date_range(self, from_date: date, to_date: date) -> list[Event]:
        return conflict_checker.search_by_date_range(self.list(), from_date, to_date)

    def search_by_title(self, keyword: str) -> list[Event]:
        return conflict_checker.search_by_title(self.list(), keyword)

    def check_conflicts(
        self, start: datetime, end: datetime, exclude_event_id: int | None = None,
    ) -> list[Event]:
        return conflict_checker.check_conflicts(self.list(), start, end, exclude_event_id)

    # ------------------------------------------------------------------
    # Backup / restore
    # ------------------------------------------------------------------

    def create_backup(self, path: str) -> bool:
        """Write the catalog as it stands in memory, saved or not."""
        with self._lock:
            return write_backup_file(path, self._events, self._specs)

    def restore_from_backup(self, path: str, append: bool = False) -> bool:
        """Restore a backup into the catalog and the store together.

        With append=False the backup replaces the catalog; with append=True
        its rows are added after the catalog's own, duplicate ids included.
        The store is rewritten in one replace_all call; if that fails both
        the store and the catalog are left as they were.
        """
        with self._lock:
            backup = read_backup_file(path)
            if backup is None:
                logger.error("Restore from %s failed, catalog unchanged", path)
                return False

            events, specs = merge_backup(self._events, self._specs, *backup, append=append)
            if not self._store.replace_all(events, specs):
                logger.error("Restore from %s could not be saved, catalog unchanged", path)
                return False

            self._events, self._specs = events, specs
            self._update_next_id()
            logger.info(
                "Restored %d events from %s (append=%s), catalog now holds %d",
                len(backup[0]), path, append, len(self._events),
            )
            return True
