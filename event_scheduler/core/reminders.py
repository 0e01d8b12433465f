"""Upcoming-event queries behind reminders, pure business logic.

Picks which events are due for a reminder and which one comes next.
No I/O and no message formatting: this module only selects events.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable

from event_scheduler.core.conflict_checker import search_by_date
from event_scheduler.data.models import Event


def events_needing_reminder(
    events: Iterable[Event], now: datetime, minutes_before: int,
) -> list[Event]:
    """Events starting after now and no later than now + minutes_before."""
    window_end = now + timedelta(minutes=minutes_before)
    return [e for e in events if now < e.start <= window_end]


def upcoming_events(events: Iterable[Event], now: datetime, limit: int = 3) -> list[Event]:
    """The next `limit` events starting after now, soonest first."""
    future = sorted((e for e in events if e.start > now), key=lambda e: e.start)
    return future[:limit]


def next_event(events: Iterable[Event], now: datetime) -> Event | None:
    """Return the earliest event starting after now, or None."""
    upcoming = upcoming_events(events, now, limit=1)
    return upcoming[0] if upcoming else None


def time_until(event: Event, now: datetime) -> timedelta:
    return event.start - now


def todays_events(events: Iterable[Event], today: date) -> list[Event]:
    return search_by_date(events, today)
