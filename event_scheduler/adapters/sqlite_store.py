"""
Event Scheduler - SQLite Store.

Implements PersistenceAdapter on a single SQLite file. Event ids are a
plain column rather than the primary key: an appended backup may repeat
ids, and the store keeps rows in insertion order just like the CSV files.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Sequence

from event_scheduler.adapters.backup_file import merge_backup, read_backup_file, write_backup_file
from event_scheduler.data.models import Event, Interval, RecurrenceSpec

logger = logging.getLogger(__name__)


class SqliteEventStore:
    """SQLite-backed storage for events and recurrence specs."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            from event_scheduler.config import settings
            db_path = settings.DATABASE_PATH

        self._db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Create the tables if they don't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS events (
                    row_id       INTEGER PRIMARY KEY AUTOINCREMENT,
                    event_id     INTEGER NOT NULL,
                    title        TEXT    NOT NULL,
                    description  TEXT    NOT NULL DEFAULT '',
                    start_time   TEXT    NOT NULL,
                    end_time     TEXT    NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS recurring_events (
                    row_id           INTEGER PRIMARY KEY AUTOINCREMENT,
                    event_id         INTEGER NOT NULL,
                    interval_token   TEXT    NOT NULL,
                    occurrence_count INTEGER,
                    end_date         TEXT
                )
            """)
        logger.debug("Event tables initialized at %s", self._db_path)

    @staticmethod
    def _row_to_event(row: sqlite3.Row) -> Event:
        return Event(
            id=row["event_id"],
            title=row["title"],
            description=row["description"],
            start=datetime.fromisoformat(row["start_time"]),
            end=datetime.fromisoformat(row["end_time"]),
        )

    @staticmethod
    def _row_to_spec(row: sqlite3.Row) -> RecurrenceSpec:
        end_date = row["end_date"]
        return RecurrenceSpec(
            event_id=row["event_id"],
            interval=Interval.parse(row["interval_token"]),
            occurrence_count=row["occurrence_count"],
            end_date=date.fromisoformat(end_date) if end_date else None,
        )

    @staticmethod
    def _write_events(conn: sqlite3.Connection, events: Sequence[Event]) -> None:
        conn.execute("DELETE FROM events")
        conn.executemany(
            """
            INSERT INTO events
                (event_id, title, description, start_time, end_time)
            VALUES (?, ?, ?, ?, ?)
            """,
            [
                (e.id, e.title, e.description, e.start.isoformat(), e.end.isoformat())
                for e in events
            ],
        )

    @staticmethod
    def _write_specs(conn: sqlite3.Connection, specs: Sequence[RecurrenceSpec]) -> None:
        conn.execute("DELETE FROM recurring_events")
        conn.executemany(
            """
            INSERT INTO recurring_events
                (event_id, interval_token, occurrence_count, end_date)
            VALUES (?, ?, ?, ?)
            """,
            [
                (
                    s.event_id,
                    str(s.interval),
                    s.occurrence_count,
                    s.end_date.isoformat() if s.end_date else None,
                )
                for s in specs
            ],
        )

    def load_events(self) -> list[Event]:
        try:
            with self._connect() as conn:
                rows = conn.execute("SELECT * FROM events ORDER BY row_id").fetchall()
        except sqlite3.Error as exc:
            logger.error("Error reading events from %s: %s", self._db_path, exc)
            return []
        return [self._row_to_event(r) for r in rows]

    def save_events(self, events: Sequence[Event]) -> bool:
        """Replace every stored event with the given sequence."""
        try:
            with self._connect() as conn:
                self._write_events(conn, events)
        except sqlite3.Error as exc:
            logger.error("Error writing events to %s: %s", self._db_path, exc)
            return False
        return True

    def load_recurrences(self) -> list[RecurrenceSpec]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    "SELECT * FROM recurring_events ORDER BY row_id"
                ).fetchall()
        except sqlite3.Error as exc:
            logger.error("Error reading recurrences from %s: %s", self._db_path, exc)
            return []
        return [self._row_to_spec(r) for r in rows]

    def save_recurrences(self, specs: Sequence[RecurrenceSpec]) -> bool:
        """Replace every stored recurrence spec with the given sequence."""
        try:
            with self._connect() as conn:
                self._write_specs(conn, specs)
        except sqlite3.Error as exc:
            logger.error("Error writing recurrences to %s: %s", self._db_path, exc)
            return False
        return True

    def replace_all(self, events: Sequence[Event], specs: Sequence[RecurrenceSpec]) -> bool:
        """Replace both tables in a single transaction."""
        try:
            with self._connect() as conn:
                self._write_events(conn, events)
                self._write_specs(conn, specs)
        except sqlite3.Error as exc:
            logger.error("Error replacing catalog in %s: %s", self._db_path, exc)
            return False
        return True

    def create_backup(self, path: str) -> bool:
        return write_backup_file(path, self.load_events(), self.load_recurrences())

    def restore_from_backup(self, path: str, append: bool) -> bool:
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
