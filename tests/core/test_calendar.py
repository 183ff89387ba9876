from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

from burndown.services.calendar import Calendar


def test_weekend_classification_uses_saturday_and_sunday() -> None:
    calendar = Calendar()

    assert calendar.is_weekend(date(2024, 6, 8)) is True
    assert calendar.is_weekend(date(2024, 6, 9)) is True
    assert calendar.is_weekend(date(2024, 6, 10)) is False
    assert calendar.is_weekend(date(2024, 6, 7)) is False


def test_aware_datetimes_are_classified_in_the_calendar_timezone() -> None:
    # Friday 23:30 UTC is already Saturday in UTC+2.
    friday_night = datetime(2024, 6, 7, 23, 30, tzinfo=UTC)

    assert Calendar(timezone=UTC).is_weekend(friday_night) is False
    assert Calendar(timezone=timezone(timedelta(hours=2))).is_weekend(friday_night) is True
    assert Calendar(timezone=timezone(timedelta(hours=2))).today(friday_night) == date(2024, 6, 8)


def test_count_weekdays_exposes_both_range_conventions() -> None:
    calendar = Calendar()
    start, end = date(2024, 6, 3), date(2024, 6, 14)

    assert calendar.count_weekdays(start, end, end_inclusive=True) == 10
    assert calendar.count_weekdays(start, end, end_inclusive=False) == 9
    assert calendar.count_weekdays(start, date(2024, 6, 13), end_inclusive=True) == 9
    assert calendar.count_weekdays(date(2024, 6, 8), date(2024, 6, 9), end_inclusive=True) == 0


def test_enumerate_days_is_restartable_and_skips_weekends() -> None:
    calendar = Calendar()
    days = calendar.enumerate_days(date(2024, 6, 1), date(2024, 6, 30), end_inclusive=True, skip_weekends=True)

    first_pass = list(days)
    second_pass = list(days)

    assert first_pass == second_pass
    assert len(first_pass) == 20
    assert all(day.weekday() < 5 for day in first_pass)
    assert first_pass == sorted(first_pass)


def test_enumerate_days_respects_end_exclusivity() -> None:
    calendar = Calendar()
    start, end = date(2024, 6, 7), date(2024, 6, 10)

    inclusive = list(calendar.enumerate_days(start, end, end_inclusive=True, skip_weekends=False))
    exclusive = list(calendar.enumerate_days(start, end, end_inclusive=False, skip_weekends=False))

    assert inclusive == [date(2024, 6, 7), date(2024, 6, 8), date(2024, 6, 9), date(2024, 6, 10)]
    assert exclusive == inclusive[:-1]
    assert list(calendar.enumerate_days(end, start, end_inclusive=True, skip_weekends=False)) == []


def test_days_between_and_next_day() -> None:
    calendar = Calendar()

    assert calendar.days_between(date(2024, 6, 3), date(2024, 6, 5)) == 2
    assert calendar.days_between(date(2024, 6, 3), date(2024, 6, 1)) == -2
    assert calendar.next_day(date(2024, 6, 7), skip_weekends=True) == date(2024, 6, 10)
    assert calendar.next_day(date(2024, 6, 7), skip_weekends=False) == date(2024, 6, 8)
