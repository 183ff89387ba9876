"""Sprint entities shared by the store, the calculation core and the renderer."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

DenseSeries = list[float]
Guideline = list[float]


@dataclass(frozen=True, slots=True)
class SprintWindow:
    """Latest sprint with inclusive start and end days."""

    sprint_id: int
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Sprint {self.sprint_id} starts after it ends ({self.start.isoformat()} > {self.end.isoformat()})"
            )


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Points remaining as recorded for one calendar day."""

    date: date
    points_remaining: float

    def __post_init__(self) -> None:
        if self.points_remaining < 0:
            raise ValueError(f"Snapshot for {self.date.isoformat()} has negative points: {self.points_remaining}")


@dataclass(frozen=True, slots=True)
class ChartDataset:
    """Aligned labels plus the actual and ideal series of a burndown chart."""

    labels: list[int]
    actual: DenseSeries
    ideal: Guideline

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
