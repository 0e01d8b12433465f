"""
Event Scheduler - Data Models.

Plain value entities for the event catalog: single events, the interval a
recurring series repeats on, and the recurrence spec tied to a series'
anchor event. Validation lives here; behaviour lives in core/.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

_INTERVAL_RE = re.compile(r"^(\d+)([dwm])$", re.ASCII)


class ValidationError(ValueError):
    """Raised when an event or recurrence spec breaks a model invariant."""


class ParseError(ValueError):
    """Raised when an interval token or stored record cannot be parsed."""


@dataclass
class Event:
    """A single calendar event.

    Instances generated by a recurrence are ordinary events with no link
    back to the series they came from.
    """

    id: int
    title: str
    description: str
    start: datetime
    end: datetime


def validate_times(start: datetime, end: datetime) -> None:
    """Raise ValidationError unless end is strictly after start."""
    if end <= start:
        raise ValidationError(
            f"Event end ({end.isoformat()}) must be after start ({start.isoformat()})"
        )


class IntervalUnit(str, Enum):
    DAY = "d"
    WEEK = "w"
    MONTH = "m"


@dataclass(frozen=True)
class Interval:
    """A fixed recurrence step, e.g. every 2 weeks."""

    unit: IntervalUnit
    multiplier: int

    @classmethod
    def parse(cls, token: str) -> Interval:
        """Parse a token like "1d", "2w" or "3m".

        Raises ParseError on anything else, including a zero multiplier.
        """
        match = _INTERVAL_RE.match(token.strip()) if isinstance(token, str) else None
        if match is None:
            raise ParseError(f"Invalid recurrence interval: {token!r}")
        multiplier = int(match.group(1))
        if multiplier <= 0:
            raise ParseError(f"Recurrence interval must be positive: {token!r}")
        return cls(unit=IntervalUnit(match.group(2)), multiplier=multiplier)

    def __str__(self) -> str:
        return f"{self.multiplier}{self.unit.value}"


@dataclass
class RecurrenceSpec:
    """How a recurring series was generated from its anchor event.

    Exactly one termination condition is set: occurrence_count or
    end_date (a calendar date, inclusive).
    """

    event_id: int                       # anchor event
    interval: Interval
    occurrence_count: int | None = None
    end_date: date | None = None

    def __post_init__(self) -> None:
        has_count = self.occurrence_count is not None
        has_end = self.end_date is not None
        if has_count == has_end:
            raise ValidationError(
                "Recurrence needs exactly one of occurrence_count or end_date"
            )
        if has_count and self.occurrence_count <= 0:
            raise ValidationError(
                f"occurrence_count must be positive, got {self.occurrence_count}"
            )
