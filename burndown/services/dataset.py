"""Assemble chart-ready burndown data for a sprint."""

from __future__ import annotations

import logging
from typing import Iterable

from burndown.models.sprint import ChartDataset, Snapshot, SprintWindow
from burndown.services.calendar import Calendar, ONE_DAY
from burndown.services.densifier import densify
from burndown.services.guideline import generate_guideline

logger = logging.getLogger(__name__)


def count_working_days(window: SprintWindow, calendar: Calendar) -> int:
    """Weekdays from the sprint start through the day before its end.

    A single-day sprint works on its only day and closes on the next one.
    """

    last_full_day = max(window.end - ONE_DAY, window.start)
    return calendar.count_weekdays(window.start, last_full_day, end_inclusive=True)


def _build_labels(count: int) -> list[int]:
    return list(range(1, count + 1))


def assemble_dataset(
    window: SprintWindow,
    snapshots: Iterable[Snapshot],
    *,
    today_offset: int,
    include_weekends: bool,
    calendar: Calendar,
) -> ChartDataset:
    """Compute the actual and ideal series for `window` and label them 1..N.

    N covers the longer of the two series, so neither line is cut off when
    snapshots run past the sprint end.
    """

    working_days = count_working_days(window, calendar)
    actual = densify(
        snapshots,
        window.start,
        today_offset=today_offset,
        include_weekends=include_weekends,
        calendar=calendar,
    )
    ideal = generate_guideline(
        window.start,
        window.end,
        actual[0],
        working_days,
        include_weekends=include_weekends,
        calendar=calendar,
    )
    labels = _build_labels(max(len(actual), len(ideal)))

    logger.info(
        "Assembled burndown dataset",
        extra={"sprint": window.sprint_id, "working_days": working_days, "labels": len(labels)},
    )
    return ChartDataset(labels=labels, actual=actual, ideal=ideal)
