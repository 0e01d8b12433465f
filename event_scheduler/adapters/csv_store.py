"""CSV store: implements PersistenceAdapter with two plain text files.

Events and recurrence specs live in separate files, one record per line.
Every save rewrites the whole file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from event_scheduler.adapters.backup_file import merge_backup, read_backup_file, write_backup_file
from event_scheduler.data.models import Event, RecurrenceSpec
from event_scheduler.data.records import (
    event_to_record,
    parse_event_lines,
    parse_recurrence_lines,
    recurrence_to_record,
)

logger = logging.getLogger(__name__)


class CsvEventStore:
    """File-backed storage for events and recurrence specs."""

    def __init__(
        self, events_path: str | None = None, recurring_path: str | None = None,
    ) -> None:
        if events_path is None or recurring_path is None:
            from event_scheduler.config import settings
            events_path = events_path or settings.EVENTS_FILE
            recurring_path = recurring_path or settings.RECURRING_FILE

        self._events_path = Path(events_path)
        self._recurring_path = Path(recurring_path)
        logger.debug("CSV store at %s / %s", self._events_path, self._recurring_path)

    @staticmethod
    def _read_lines(path: Path) -> list[str]:
        if not path.exists():
            return []
        try:
            return path.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            logger.error("Error reading %s: %s", path, exc)
            return []

    @staticmethod
    def _write_lines(path: Path, lines: list[str]) -> bool:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        except OSError as exc:
            logger.error("Error writing %s: %s", path, exc)
            return False
        return True

    def load_events(self) -> list[Event]:
        return parse_event_lines(self._read_lines(self._events_path))

    def save_events(self, events: Sequence[Event]) -> bool:
        return self._write_lines(self._events_path, [event_to_record(e) for e in events])

    def load_recurrences(self) -> list[RecurrenceSpec]:
        return parse_recurrence_lines(self._read_lines(self._recurring_path))

    def save_recurrences(self, specs: Sequence[RecurrenceSpec]) -> bool:
        return self._write_lines(self._recurring_path, [recurrence_to_record(s) for s in specs])

    def replace_all(self, events: Sequence[Event], specs: Sequence[RecurrenceSpec]) -> bool:
        """Rewrite both files together.

        Both files are staged next to their targets first and only then
        swapped in. If the second swap fails the previous events file is put
        back, so the two files never disagree.
        """
        targets = [
            (self._events_path, [event_to_record(e) for e in events]),
            (self._recurring_path, [recurrence_to_record(s) for s in specs]),
        ]
        staged: list[Path] = []
        for path, lines in targets:
            tmp = path.with_name(path.name + ".tmp")
            if not self._write_lines(tmp, lines):
                for leftover in staged:
                    leftover.unlink(missing_ok=True)
                return False
            staged.append(tmp)

        events_tmp, specs_tmp = staged
        try:
            previous_events = (
                self._events_path.read_bytes() if self._events_path.exists() else None
            )
            events_tmp.replace(self._events_path)
        except OSError as exc:
            logger.error("Error replacing %s: %s", self._events_path, exc)
            events_tmp.unlink(missing_ok=True)
            specs_tmp.unlink(missing_ok=True)
            return False

        try:
            specs_tmp.replace(self._recurring_path)
        except OSError as exc:
            logger.error("Error replacing %s: %s", self._recurring_path, exc)
            specs_tmp.unlink(missing_ok=True)
            if previous_events is None:
                self._events_path.unlink()
            else:
                self._events_path.write_bytes(previous_events)
            return False
        return True

    def create_backup(self, path: str) -> bool:
        return write_backup_file(path, self.load_events(), self.load_recurrences())

    def restore_from_backup(self, path: str, append: bool) -> bool:
        """Load a backup into the files, replacing or appending to their rows."""
        backup = read_backup_file(path)
        if backup is None:
            return False

        current_events = self.load_events() if append else []
        current_specs = self.load_recurrences() if append else []
        events, specs = merge_backup(current_events, current_specs, *backup, append=append)

        if not self.replace_all(events, specs):
            return False
        logger.info("Restored %d events from %s (append=%s)", len(backup[0]), path, append)
        return True
