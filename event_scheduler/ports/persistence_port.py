"""Persistence port: abstract interface for storing the event catalog.

The catalog depends on this protocol, never on a specific storage format.
Every method reports I/O trouble as a False result; nothing here raises
for a missing or unwritable backing store.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from event_scheduler.data.models import Event, RecurrenceSpec


class PersistenceAdapter(Protocol):
    """Abstract store interface used by the event catalog."""

    def load_events(self) -> list[Event]: ...

    def save_events(self, events: Sequence[Event]) -> bool: ...

    def load_recurrences(self) -> list[RecurrenceSpec]: ...

    def save_recurrences(self, specs: Sequence[RecurrenceSpec]) -> bool: ...

    def replace_all(
        self, events: Sequence[Event], specs: Sequence[RecurrenceSpec],
    ) -> bool:
        """Replace both collections in one write. On False nothing changed."""
        ...

    def create_backup(self, path: str) -> bool: ...

    def restore_from_backup(self, path: str, append: bool) -> bool: ...
