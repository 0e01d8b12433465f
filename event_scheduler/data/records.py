"""
Event Scheduler - Record Codec.

One entity per line, comma separated:

    event:       id,title,description,start,end
    recurrence:  eventId,intervalToken,occurrenceCount,endDateOrSentinel

Commas and backslashes inside an event's title or description are written
as ``\\,`` and ``\\\\``. A backup file holds both record kinds, in two
sections introduced by marker lines.
No I/O here: stores read and write the text, this module only converts it.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from event_scheduler.data.models import (
    Event,
    Interval,
    ParseError,
    RecurrenceSpec,
)

EVENTS_MARKER = "# EVENTS"
RECURRING_MARKER = "# RECURRING_EVENTS"

_NO_END_DATE = "0"
_EVENT_FIELDS = 5


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace(",", "\\,")


def _split_fields(line: str) -> list[str]:
    """Split on unescaped commas, dropping the escapes."""
    fields: list[str] = []
    current: list[str] = []
    escaped = False
    for ch in line:
        if escaped:
            current.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == ",":
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


def event_to_record(event: Event) -> str:
    return ",".join([
        str(event.id),
        _escape(event.title),
        _escape(event.description),
        event.start.isoformat(),
        event.end.isoformat(),
    ])


def event_from_record(line: str) -> Event:
    """Parse an event line into its 5 fields.

    Lines written without escapes may carry bare commas in the
    description: the id is taken from the left, both timestamps from the
    right, and any extra fields are joined back into the description.
    """
    fields = _split_fields(line)
    if len(fields) < _EVENT_FIELDS:
        raise ParseError(f"Invalid event record: {line!r}")

    id_raw, title = fields[0], fields[1]
    description = ",".join(fields[2:-2])
    start_raw, end_raw = fields[-2], fields[-1]

    try:
        return Event(
            id=int(id_raw.strip()),
            title=title.strip(),
            description=description.strip(),
            start=datetime.fromisoformat(start_raw.strip()),
            end=datetime.fromisoformat(end_raw.strip()),
        )
    except ValueError as exc:
        raise ParseError(f"Invalid event record: {line!r} ({exc})") from exc


def recurrence_to_record(spec: RecurrenceSpec) -> str:
    end_raw = spec.end_date.isoformat() if spec.end_date is not None else _NO_END_DATE
    return ",".join([
        str(spec.event_id),
        str(spec.interval),
        str(spec.occurrence_count or 0),
        end_raw,
    ])


def recurrence_from_record(line: str) -> RecurrenceSpec:
    parts = [p.strip() for p in line.split(",")]
    if len(parts) != 4:
        raise ParseError(f"Invalid recurrence record: {line!r}")

    id_raw, token, count_raw, end_raw = parts
    try:
        count = int(count_raw)
        end_date = None if end_raw == _NO_END_DATE else date.fromisoformat(end_raw)
        return RecurrenceSpec(
            event_id=int(id_raw),
            interval=Interval.parse(token),
            occurrence_count=count or None,
            end_date=end_date,
        )
    except ValueError as exc:
        # covers ParseError and ValidationError
        raise ParseError(f"Invalid recurrence record: {line!r} ({exc})") from exc


def parse_event_lines(lines: Iterable[str]) -> list[Event]:
    return [event_from_record(line) for line in lines if line.strip()]


def parse_recurrence_lines(lines: Iterable[str]) -> list[RecurrenceSpec]:
    return [recurrence_from_record(line) for line in lines if line.strip()]


def format_backup(events: Iterable[Event], specs: Iterable[RecurrenceSpec]) -> str:
    """Render the two-section backup text."""
    lines = [EVENTS_MARKER]
    lines.extend(event_to_record(e) for e in events)
    lines.append("")
    lines.append(RECURRING_MARKER)
    lines.extend(recurrence_to_record(s) for s in specs)
    return "\n".join(lines) + "\n"


def parse_backup(text: str) -> tuple[list[Event], list[RecurrenceSpec]]:
    """Parse backup text into (events, specs).

    Only the two marker lines switch sections. Lines before the first
    marker are ignored; inside a section every other non-blank line is a
    record. Raises ParseError on the first malformed record, before the
    caller has written anything.
    """
    events: list[Event] = []
    specs: list[RecurrenceSpec] = []
    section = ""

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line in (EVENTS_MARKER, RECURRING_MARKER):
            section = line
            continue
        if section == EVENTS_MARKER:
            events.append(event_from_record(line))
        elif section == RECURRING_MARKER:
            specs.append(recurrence_from_record(line))

    return events, specs
