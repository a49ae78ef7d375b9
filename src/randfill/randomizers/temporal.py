"""Date and time randomizers bounded by the configured ranges."""

from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta

from randfill.config.schema import Range

__all__ = [
    "DateRandomizer",
    "TimeRandomizer",
    "DateTimeRandomizer",
    "TimeDeltaRandomizer",
]

_MICROS_PER_SECOND = 1_000_000


def _micros_of_day(value: time) -> int:
    return (
        (value.hour * 3600 + value.minute * 60 + value.second) * _MICROS_PER_SECOND
        + value.microsecond
    )


class DateRandomizer:
    """Dates uniformly drawn from ``date_range`` (both ends inclusive)."""

    def __init__(self, rng: random.Random, date_range: Range[date]) -> None:
        self._rng = rng
        self._start = date_range.min
        self._days = (date_range.max - date_range.min).days

    def get_random_value(self) -> date:
        return self._start + timedelta(days=self._rng.randint(0, self._days))


class TimeRandomizer:
    """Times uniformly drawn from ``time_range`` at microsecond resolution."""

    def __init__(self, rng: random.Random, time_range: Range[time]) -> None:
        self._rng = rng
        self._low = _micros_of_day(time_range.min)
        self._high = _micros_of_day(time_range.max)

    def get_random_value(self) -> time:
        micros = self._rng.randint(self._low, self._high)
        seconds, microsecond = divmod(micros, _MICROS_PER_SECOND)
        minutes, second = divmod(seconds, 60)
        hour, minute = divmod(minutes, 60)
        return time(hour, minute, second, microsecond)


class DateTimeRandomizer:
    """Naive datetimes combining a random date with a random time."""

    def __init__(self, dates: DateRandomizer, times: TimeRandomizer) -> None:
        self._dates = dates
        self._times = times

    def get_random_value(self) -> datetime:
        return datetime.combine(self._dates.get_random_value(), self._times.get_random_value())


class TimeDeltaRandomizer:
    def __init__(self, rng: random.Random, max_days: int = 365) -> None:
        self._rng = rng
        self._max_seconds = max_days * 86400

    def get_random_value(self) -> timedelta:
        return timedelta(seconds=self._rng.randint(0, self._max_seconds))
