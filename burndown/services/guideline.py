"""Ideal burndown line for a sprint."""

from __future__ import annotations

import logging
from datetime import date

from burndown.models.sprint import Guideline
from burndown.services.calendar import Calendar
from burndown.services.errors import DivisionByZeroError

logger = logging.getLogger(__name__)

GUIDELINE_PRECISION = 2


def _walk_days(start: date, end: date, *, include_weekends: bool, calendar: Calendar) -> list[date]:
    days = list(calendar.enumerate_days(start, end, end_inclusive=True, skip_weekends=not include_weekends))
    # The closing point always follows at least one working day.
    if len(days) == 1:
        days.append(calendar.next_day(days[0], skip_weekends=not include_weekends))
    return days


def generate_guideline(
    start: date,
    end: date,
    initial_points: float,
    working_days: int,
    *,
    include_weekends: bool,
    calendar: Calendar,
) -> Guideline:
    """Spread `initial_points` evenly over `working_days`, from `start` through `end`.

    Work happens on each weekday before `end`; `end` itself only carries the
    closing value. With weekends included the line stays flat across them,
    otherwise weekend days are left out of the walk.
    """

    if working_days == 0:
        raise DivisionByZeroError(
            f"Sprint {start.isoformat()}..{end.isoformat()} has no working days to burn {initial_points} points over"
        )
    per_day_burn = initial_points / working_days
    logger.info(
        "Generating ideal burndown",
        extra={"initial_points": initial_points, "working_days": working_days, "per_day_burn": per_day_burn},
    )

    values: list[float] = []
    previous_was_weekday = False
    for day in _walk_days(start, end, include_weekends=include_weekends, calendar=calendar):
        if not values:
            values.append(float(initial_points))
        else:
            values.append(values[-1] - (per_day_burn if previous_was_weekday else 0.0))
        previous_was_weekday = not calendar.is_weekend(day)

    # Adding 0.0 turns a rounded -0.0 into 0.0.
    return [round(value, GUIDELINE_PRECISION) + 0.0 for value in values]
