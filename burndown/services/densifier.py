"""Turn sparse daily snapshots into a gap-free points-remaining series."""

from __future__ import annotations

import logging
import warnings
from datetime import date
from typing import Iterable

from burndown.models.sprint import DenseSeries, Snapshot
from burndown.services.calendar import Calendar, ONE_DAY
from burndown.services.errors import DuplicateSnapshotWarning, EmptyDataError, InvalidSnapshotError

logger = logging.getLogger(__name__)


def _index_by_offset(snapshots: Iterable[Snapshot], start: date, calendar: Calendar) -> dict[int, float]:
    by_offset: dict[int, float] = {}
    for snapshot in snapshots:
        offset = calendar.days_between(start, snapshot.date)
        if offset < 0:
            raise InvalidSnapshotError(snapshot.date, start)

        if offset in by_offset:
            logger.warning(
                "Found duplicate snapshot",
                extra={
                    "date": snapshot.date.isoformat(),
                    "day_offset": offset,
                    "kept": by_offset[offset],
                    "ignored": snapshot.points_remaining,
                },
            )
            warnings.warn(
                DuplicateSnapshotWarning(offset, by_offset[offset], snapshot.points_remaining),
                stacklevel=3,
            )
            continue

        by_offset[offset] = float(snapshot.points_remaining)
    return by_offset


def _drop_weekend_slots(series: DenseSeries, start: date, calendar: Calendar) -> DenseSeries:
    compacted: DenseSeries = []
    day = start
    for value in series:
        if not calendar.is_weekend(day):
            compacted.append(value)
        day += ONE_DAY
    return compacted


def densify(
    snapshots: Iterable[Snapshot],
    start: date,
    *,
    today_offset: int,
    include_weekends: bool,
    calendar: Calendar,
) -> DenseSeries:
    """Index snapshots by day offset from `start` and fill the days nobody reported.

    A day up to and including today without a snapshot counts as 0 points
    remaining. Offsets are computed against the full calendar; weekend slots
    are removed only afterwards, when `include_weekends` is false.
    """

    by_offset = _index_by_offset(snapshots, start, calendar)
    if 0 not in by_offset:
        raise EmptyDataError(f"No snapshot recorded for the first sprint day {start.isoformat()}")

    length = max(today_offset + 1, max(by_offset) + 1)
    series: DenseSeries = [by_offset.get(offset, 0.0) for offset in range(length)]
    logger.info(
        "Densified snapshots",
        extra={"observed_days": len(by_offset), "today_offset": today_offset, "length": length},
    )

    if include_weekends:
        return series

    compacted = _drop_weekend_slots(series, start, calendar)
    if not compacted:
        raise EmptyDataError(f"Every recorded day since {start.isoformat()} falls on a weekend")
    return compacted
