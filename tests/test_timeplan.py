"""Tests for time-of-day helpers."""

from datetime import date, datetime

import pytest

from shiftplan.services.timeplan import at_time_string, hour_of_day, hours_between, make_datetime, parse_time_string


def test_parse_time_string():
    assert parse_time_string("07:30") == 7.5
    assert parse_time_string("06:00") == 6.0
    assert parse_time_string("17:45") == 17.75


@pytest.mark.parametrize("value", ["7", "", "ab:cd", None])
def test_parse_time_string_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_time_string(value)


def test_make_datetime_and_time_string():
    day = date(2025, 3, 3)
    assert make_datetime(day, 6, 0) == datetime(2025, 3, 3, 6, 0)
    assert at_time_string(day, "09:20") == datetime(2025, 3, 3, 9, 20)


def test_hour_of_day_and_hours_between():
    start = datetime(2025, 3, 3, 6, 0)
    end = datetime(2025, 3, 3, 9, 20)
    assert hour_of_day(end) == pytest.approx(9 + 1 / 3)
    assert hours_between(start, end) == pytest.approx(10 / 3)
