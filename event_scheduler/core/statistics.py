"""
Event Scheduler - Catalog Statistics.

Counts and distributions over a snapshot of events. Returns plain data;
presenting it is up to the caller.
"""

from __future__ import annotations

import calendar
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from event_scheduler.data.models import Event


@dataclass
class EventStatistics:
    """Bundled statistics for a set of events."""

    total: int
    past: int                  # ended before now
    ongoing: int               # started before now, ends after now
    upcoming: int              # starts after now
    by_weekday: dict[str, int] = field(default_factory=dict)   # "Monday" -> count
    by_month: dict[str, int] = field(default_factory=dict)     # "2025-01" -> count
    busiest_weekday: str | None = None
    busiest_month: str | None = None
    average_duration_minutes: float = 0.0


def _busiest(counts: Counter) -> str | None:
    if not counts:
        return None
    # max() keeps the first key on ties, so ties go to the earliest weekday/month
    return max(counts, key=lambda k: counts[k])


def compute_statistics(events: Sequence[Event], now: datetime) -> EventStatistics:
    """Compute statistics for `events` relative to `now`."""
    weekdays = Counter(calendar.day_name[e.start.weekday()] for e in events)
    months = Counter(e.start.strftime("%Y-%m") for e in events)

    by_weekday = {day: weekdays.get(day, 0) for day in calendar.day_name}
    by_month = dict(sorted(months.items()))

    durations = [(e.end - e.start).total_seconds() / 60 for e in events]
    average = sum(durations) / len(durations) if durations else 0.0

    return EventStatistics(
        total=len(events),
        past=sum(1 for e in events if e.end < now),
        ongoing=sum(1 for e in events if e.start < now < e.end),
        upcoming=sum(1 for e in events if e.start > now),
        by_weekday=by_weekday,
        by_month=by_month,
        busiest_weekday=_busiest(Counter({d: c for d, c in by_weekday.items() if c})),
        busiest_month=_busiest(Counter(by_month)),
        average_duration_minutes=round(average, 1),
    )
