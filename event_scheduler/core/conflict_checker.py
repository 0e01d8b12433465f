"""
Event Scheduler - Event Conflict Checker.

Date, range and title searches plus time-conflict detection over a
snapshot of events. Pure functions: no state, no I/O, results keep the
order of the input.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from event_scheduler.data.models import Event


def search_by_date(events: Iterable[Event], day: date) -> list[Event]:
    """Events whose calendar days include `day`.

    A multi-day event matches every day it spans, not only its first and
    last day.
    """
    return [e for e in events if e.start.date() <= day <= e.end.date()]


def search_by_date_range(
    events: Iterable[Event], from_date: date, to_date: date,
) -> list[Event]:
    """Events whose [start day, end day] overlaps [from_date, to_date], inclusive."""
    return [
        e for e in events
        if e.start.date() <= to_date and e.end.date() >= from_date
    ]


def search_by_title(events: Iterable[Event], keyword: str) -> list[Event]:
    """Case-insensitive substring match on the title."""
    needle = keyword.casefold()
    return [e for e in events if needle in e.title.casefold()]


def overlaps(start: datetime, end: datetime, event: Event) -> bool:
    """Check if [start, end) overlaps the event's [start, end)."""
    return start < event.end and end > event.start


def check_conflicts(
    events: Iterable[Event],
    start: datetime,
    end: datetime,
    exclude_event_id: int | None = None,
) -> list[Event]:
    """Events that overlap the proposed time range.

    Touching ranges (one ends exactly when the other starts) are not
    conflicts.

    Args:
        events: Snapshot to check against.
        start: Proposed start.
        end: Proposed end.
        exclude_event_id: Event ID to skip (for reschedule self-exclusion).
    """
    return [
        e for e in events
        if e.id != exclude_event_id and overlaps(start, end, e)
    ]
