"""Tests for event_scheduler.adapters.sqlite_store: SQLite storage."""

import sqlite3
from datetime import date, datetime

from event_scheduler.adapters.sqlite_store import SqliteEventStore
from event_scheduler.data.models import Event, Interval, RecurrenceSpec


def _event(id, title="Test"):
    return Event(id, title, "notes, with comma", datetime(2025, 1, 1, 9), datetime(2025, 1, 1, 10))


class TestSqliteEvents:
    def test_empty_db_loads_empty(self, sqlite_store):
        assert sqlite_store.load_events() == []
        assert sqlite_store.load_recurrences() == []

    def test_save_then_load(self, sqlite_store):
        events = [_event(3, "C"), _event(1, "A")]
        assert sqlite_store.save_events(events) is True
        # Insertion order, not id order
        assert sqlite_store.load_events() == events

    def test_save_replaces_previous_rows(self, sqlite_store):
        sqlite_store.save_events([_event(1), _event(2)])
        sqlite_store.save_events([_event(5)])
        assert [e.id for e in sqlite_store.load_events()] == [5]

    def test_duplicate_ids_are_kept(self, sqlite_store):
        sqlite_store.save_events([_event(1, "first"), _event(1, "second")])
        assert [e.title for e in sqlite_store.load_events()] == ["first", "second"]

    def test_data_survives_new_instance(self, tmp_path):
        path = str(tmp_path / "events.db")
        SqliteEventStore(db_path=path).save_events([_event(1)])
        assert SqliteEventStore(db_path=path).load_events() == [_event(1)]


class TestSqliteRecurrences:
    def test_save_then_load(self, sqlite_store):
        specs = [
            RecurrenceSpec(1, Interval.parse("1d"), occurrence_count=3),
            RecurrenceSpec(2, Interval.parse("1m"), end_date=date(2025, 12, 31)),
        ]
        assert sqlite_store.save_recurrences(specs) is True
        assert sqlite_store.load_recurrences() == specs


class TestSqliteErrors:
    def test_save_error_returns_false(self, sqlite_store, tmp_path):
        # Drop the table behind the store's back
        conn = sqlite3.connect(str(tmp_path / "test_events.db"))
        conn.execute("DROP TABLE events")
        conn.commit()
        conn.close()
        assert sqlite_store.save_events([_event(1)]) is False
        assert sqlite_store.load_events() == []


class TestSqliteBackup:
    def test_backup_and_replace_restore(self, sqlite_store, backup_path):
        sqlite_store.save_events([_event(i) for i in range(1, 6)])
        sqlite_store.save_recurrences([RecurrenceSpec(1, Interval.parse("1w"), occurrence_count=5)])
        assert sqlite_store.create_backup(backup_path) is True

        sqlite_store.save_events([_event(99)])
        sqlite_store.save_recurrences([])
        assert sqlite_store.restore_from_backup(backup_path, append=False) is True

        assert [e.id for e in sqlite_store.load_events()] == [1, 2, 3, 4, 5]
        assert len(sqlite_store.load_recurrences()) == 1

    def test_append_restore(self, sqlite_store, backup_path):
        sqlite_store.save_events([_event(1)])
        sqlite_store.create_backup(backup_path)
        assert sqlite_store.restore_from_backup(backup_path, append=True) is True
        assert [e.id for e in sqlite_store.load_events()] == [1, 1]


class TestSqliteReplaceAll:
    def test_replaces_both_tables(self, sqlite_store):
        sqlite_store.save_events([_event(1), _event(2)])
        specs = [RecurrenceSpec(9, Interval.parse("2w"), occurrence_count=4)]
        assert sqlite_store.replace_all([_event(9)], specs) is True
        assert [e.id for e in sqlite_store.load_events()] == [9]
        assert sqlite_store.load_recurrences() == specs

    def test_failure_rolls_back_both_tables(self, sqlite_store, tmp_path):
        sqlite_store.save_events([_event(1), _event(2)])
        conn = sqlite3.connect(str(tmp_path / "test_events.db"))
        conn.execute("DROP TABLE recurring_events")
        conn.commit()
        conn.close()

        assert sqlite_store.replace_all([_event(9)], []) is False
        assert [e.id for e in sqlite_store.load_events()] == [1, 2]
