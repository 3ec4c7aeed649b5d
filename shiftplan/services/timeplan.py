"""Time-of-day helpers."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta


def parse_time_string(value: str) -> float:
    """
    Parse "HH:MM" into fractional hours.

    >>> parse_time_string("07:30")
    7.5
    """
    try:
        hours, minutes = value.strip().split(":")
        return int(hours) + int(minutes) / 60
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid time string {value!r}, expected HH:MM") from e


def hour_of_day(moment: datetime) -> float:
    """Fractional hour of a timestamp, seconds ignored."""
    return moment.hour + moment.minute / 60


def make_datetime(day: date, hours: int, minutes: int = 0) -> datetime:
    """Absolute timestamp on a day at the given hour and minute."""
    return datetime.combine(day, time(hours, minutes))


def at_time_string(day: date, value: str) -> datetime:
    """Absolute timestamp on a day at an "HH:MM" time."""
    hours = parse_time_string(value)
    whole = int(hours)
    return make_datetime(day, whole, round((hours - whole) * 60))


def add_minutes(moment: datetime, minutes: float) -> datetime:
    return moment + timedelta(minutes=minutes)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0
