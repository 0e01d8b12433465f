"""In-memory store: implements PersistenceAdapter without touching disk.

Used when STORAGE_BACKEND=memory and as the fake store in tests. Backups
still go to real files so they can be restored into any other store.
"""

from __future__ import annotations

import copy
import logging
from typing import Sequence

from event_scheduler.adapters.backup_file import merge_backup, read_backup_file, write_backup_file
from event_scheduler.data.models import Event, RecurrenceSpec

logger = logging.getLogger(__name__)


class InMemoryEventStore:
    """Keeps deep copies of whatever the catalog saves."""

    def __init__(
        self,
        events: Sequence[Event] = (),
        specs: Sequence[RecurrenceSpec] = (),
    ) -> None:
        self._events: list[Event] = copy.deepcopy(list(events))
        self._specs: list[RecurrenceSpec] = copy.deepcopy(list(specs))
        self.save_count = 0

    def load_events(self) -> list[Event]:
        return copy.deepcopy(self._events)

    def save_events(self, events: Sequence[Event]) -> bool:
        self._events = copy.deepcopy(list(events))
        self.save_count += 1
        return True

    def load_recurrences(self) -> list[RecurrenceSpec]:
        return copy.deepcopy(self._specs)

    def save_recurrences(self, specs: Sequence[RecurrenceSpec]) -> bool:
        self._specs = copy.deepcopy(list(specs))
        return True

    def replace_all(self, events: Sequence[Event], specs: Sequence[RecurrenceSpec]) -> bool:
        self._events = copy.deepcopy(list(events))
        self._specs = copy.deepcopy(list(specs))
        return True

    def create_backup(self, path: str) -> bool:
        return write_backup_file(path, self._events, self._specs)

    def restore_from_backup(self, path: str, append: bool) -> bool:
        backup = read_backup_file(path)
        if backup is None:
            return False
        events, specs = merge_backup(self._events, self._specs, *backup, append=append)
        self.replace_all(events, specs)
        logger.info("Restored %d events from %s (append=%s)", len(backup[0]), path, append)
        return True
