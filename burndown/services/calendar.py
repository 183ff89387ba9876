"""Timezone-pinned day arithmetic for sprint burndowns."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Iterator

ONE_DAY = timedelta(days=1)
_SATURDAY = 5


@dataclass(frozen=True, slots=True)
class DayRange:
    """Re-iterable ascending run of calendar days."""

    start: date
    stop: date
    skip_weekends: bool

    def __iter__(self) -> Iterator[date]:
        current = self.start
        while current < self.stop:
            if not (self.skip_weekends and current.weekday() >= _SATURDAY):
                yield current
            current += ONE_DAY


@dataclass(frozen=True, slots=True)
class Calendar:
    """Classifies and enumerates days in a single fixed timezone.

    Dates are taken as already local to the calendar. Aware datetimes are
    converted into the calendar timezone before their day is read, so every
    weekday decision in a run agrees with every other one.
    """

    timezone: tzinfo = UTC

    def local_date(self, value: datetime) -> date:
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(self.timezone).date()

    def today(self, now: datetime) -> date:
        return self.local_date(now)

    def is_weekend(self, value: date | datetime) -> bool:
        day = self.local_date(value) if isinstance(value, datetime) else value
        return day.weekday() >= _SATURDAY

    @staticmethod
    def days_between(start: date, later: date) -> int:
        """Whole calendar days from `start` to `later` (negative when `later` is earlier)."""
        return (later - start).days

    def enumerate_days(
        self,
        start: date,
        end: date,
        *,
        end_inclusive: bool,
        skip_weekends: bool,
    ) -> DayRange:
        stop = end + ONE_DAY if end_inclusive else end
        return DayRange(start=start, stop=stop, skip_weekends=skip_weekends)

    def count_weekdays(self, start: date, end: date, *, end_inclusive: bool) -> int:
        return sum(1 for _ in self.enumerate_days(start, end, end_inclusive=end_inclusive, skip_weekends=True))

    def next_day(self, day: date, *, skip_weekends: bool) -> date:
        candidate = day + ONE_DAY
        while skip_weekends and self.is_weekend(candidate):
            candidate += ONE_DAY
        return candidate
