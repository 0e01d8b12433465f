"""
Event Scheduler - Recurrence Engine.

Expands a recurrence spec into concrete events. The anchor event already
exists; every further instance is shifted from the anchor by k whole
intervals and inserted through a callback supplied by the catalog.

No locking or persistence here: the catalog wraps the whole expansion.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from dateutil.relativedelta import relativedelta

from event_scheduler.data.models import Event, Interval, IntervalUnit, ParseError, RecurrenceSpec

logger = logging.getLogger(__name__)

# (title, description, start, end) -> stored event
CreateFn = Callable[[str, str, datetime, datetime], Event]


def _step(interval: Interval, steps: int) -> relativedelta:
    amount = interval.multiplier * steps
    if interval.unit is IntervalUnit.DAY:
        return relativedelta(days=amount)
    if interval.unit is IntervalUnit.WEEK:
        return relativedelta(weeks=amount)
    if interval.unit is IntervalUnit.MONTH:
        # relativedelta clamps to the last day of shorter months
        return relativedelta(months=amount)
    raise ParseError(f"Invalid recurring interval type: {interval.unit!r}")


def shift(value: datetime, interval: Interval, steps: int) -> datetime:
    """Return value moved forward by `steps` whole intervals."""
    return value + _step(interval, steps)


def _should_stop(spec: RecurrenceSpec, k: int, start: datetime) -> bool:
    if spec.occurrence_count is not None and k >= spec.occurrence_count:
        return True
    if spec.end_date is not None and start.date() > spec.end_date:
        return True
    return False


def generate_recurrence(anchor: Event, spec: RecurrenceSpec, create: CreateFn) -> list[int]:
    """Materialize the series described by `spec`, starting at `anchor`.

    Instance k runs from anchor.start + k*interval to anchor.end + k*interval,
    so every instance keeps the anchor's duration. Instance 0 is the anchor
    itself and is never duplicated. Expansion stops before the first
    instance that exceeds the occurrence count or starts after end_date.

    Args:
        anchor: The already-stored first instance of the series.
        spec: Interval and termination condition.
        create: Inserts one sibling event and returns it.

    Returns:
        Ids of every instance in the series, anchor first.
    """
    ids = [anchor.id]
    k = 1
    while True:
        start = shift(anchor.start, spec.interval, k)
        if _should_stop(spec, k, start):
            break
        end = shift(anchor.end, spec.interval, k)
        sibling = create(anchor.title, anchor.description, start, end)
        ids.append(sibling.id)
        k += 1

    logger.info(
        "Recurrence for event #%d every %s: %d instances",
        anchor.id, spec.interval, len(ids),
    )
    return ids
