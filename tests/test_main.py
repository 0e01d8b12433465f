"""Tests for the main.py startup summary."""

import logging
from datetime import datetime, timedelta
from unittest.mock import patch

from event_scheduler.adapters.memory_store import InMemoryEventStore
from event_scheduler.data.models import Event


def test_logs_empty_catalog(caplog):
    import main

    with patch.object(main, "create_store", return_value=InMemoryEventStore()):
        with caplog.at_level(logging.INFO, logger="event_scheduler"):
            main.main()

    assert "0 events in catalog (next id 1)" in caplog.text
    assert "No upcoming events scheduled" in caplog.text


def test_logs_next_event_and_reminder(caplog):
    import main

    soon = datetime.now() + timedelta(minutes=5)
    store = InMemoryEventStore([Event(3, "Call mom", "", soon, soon + timedelta(minutes=20))])
    with patch.object(main, "create_store", return_value=store):
        with caplog.at_level(logging.INFO, logger="event_scheduler"):
            main.main()

    assert "Next event: #3 'Call mom'" in caplog.text
    assert "Reminder: 'Call mom'" in caplog.text
