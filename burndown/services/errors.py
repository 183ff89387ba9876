"""Error kinds raised by the burndown calculation and the sprint store."""

from __future__ import annotations

from datetime import date


class BurndownError(Exception):
    """Base class for burndown failures."""


class InvalidSnapshotError(BurndownError):
    """A snapshot is dated before the sprint start."""

    def __init__(self, snapshot_date: date, start: date) -> None:
        self.snapshot_date = snapshot_date
        self.start = start
        super().__init__(f"Snapshot dated {snapshot_date.isoformat()} predates sprint start {start.isoformat()}")


class EmptyDataError(BurndownError):
    """No snapshot exists for the first day of the sprint."""


class DivisionByZeroError(BurndownError, ZeroDivisionError):
    """The sprint has no working days to spread the initial points over."""


class DataSourceError(BurndownError):
    """The sprint store failed or returned an unusable payload."""


class DuplicateSnapshotWarning(UserWarning):
    """More than one snapshot maps to the same sprint day; the first one is kept."""

    def __init__(self, day_offset: int, kept: float, ignored: float) -> None:
        self.day_offset = day_offset
        self.kept = kept
        self.ignored = ignored
        super().__init__(f"Duplicate snapshot for day {day_offset}: kept {kept}, ignored {ignored}")
