"""Tests for event_scheduler.data.models: events, intervals, recurrence specs."""

from dataclasses import asdict
from datetime import date, datetime

import pytest

from event_scheduler.data.models import (
    Event,
    Interval,
    IntervalUnit,
    ParseError,
    RecurrenceSpec,
    ValidationError,
    validate_times,
)


def test_event_creation_with_all_fields():
    event = Event(
        id=1,
        title="Dentist",
        description="Bring card",
        start=datetime(2025, 1, 1, 9, 0),
        end=datetime(2025, 1, 1, 10, 0),
    )
    assert event.title == "Dentist"
    assert event.end - event.start == datetime(2025, 1, 1, 10) - datetime(2025, 1, 1, 9)


def test_event_serializable():
    event = Event(1, "Test", "", datetime(2025, 1, 1, 9), datetime(2025, 1, 1, 10))
    d = asdict(event)
    assert d["title"] == "Test"
    assert d["description"] == ""


class TestValidateTimes:
    def test_end_after_start_passes(self):
        validate_times(datetime(2025, 1, 1, 9), datetime(2025, 1, 1, 9, 1))

    def test_end_equal_start_raises(self):
        with pytest.raises(ValidationError):
            validate_times(datetime(2025, 1, 1, 9), datetime(2025, 1, 1, 9))

    def test_end_before_start_raises(self):
        with pytest.raises(ValidationError, match="must be after start"):
            validate_times(datetime(2025, 1, 1, 10), datetime(2025, 1, 1, 9))


class TestIntervalParse:
    @pytest.mark.parametrize("token,unit,multiplier", [
        ("1d", IntervalUnit.DAY, 1),
        ("2w", IntervalUnit.WEEK, 2),
        ("12m", IntervalUnit.MONTH, 12),
    ])
    def test_valid_tokens(self, token, unit, multiplier):
        interval = Interval.parse(token)
        assert interval.unit is unit
        assert interval.multiplier == multiplier

    def test_str_renders_token(self):
        assert str(Interval.parse("3w")) == "3w"

    @pytest.mark.parametrize("token", ["", "d", "1", "1y", "1dd", "-1d", "1.5d", "w2"])
    def test_malformed_tokens_raise(self, token):
        with pytest.raises(ParseError):
            Interval.parse(token)

    @pytest.mark.parametrize("token", ["٣d", "２w", "1٠m"])
    def test_non_ascii_digits_raise(self, token):
        with pytest.raises(ParseError):
            Interval.parse(token)

    def test_zero_multiplier_raises(self):
        with pytest.raises(ParseError, match="positive"):
            Interval.parse("0d")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            Interval.parse("bogus")


class TestRecurrenceSpec:
    def test_count_only(self):
        spec = RecurrenceSpec(1, Interval.parse("1d"), occurrence_count=3)
        assert spec.end_date is None

    def test_end_date_only(self):
        spec = RecurrenceSpec(1, Interval.parse("1w"), end_date=date(2025, 3, 1))
        assert spec.occurrence_count is None

    def test_both_terminations_rejected(self):
        with pytest.raises(ValidationError, match="exactly one"):
            RecurrenceSpec(
                1, Interval.parse("1d"),
                occurrence_count=3, end_date=date(2025, 3, 1),
            )

    def test_no_termination_rejected(self):
        with pytest.raises(ValidationError, match="exactly one"):
            RecurrenceSpec(1, Interval.parse("1d"))

    def test_non_positive_count_rejected(self):
        with pytest.raises(ValidationError):
            RecurrenceSpec(1, Interval.parse("1d"), occurrence_count=0)
