"""Sprint models"""

from burndown.models.sprint import ChartDataset, DenseSeries, Guideline, Snapshot, SprintWindow

__all__ = [
    "SprintWindow",
    "Snapshot",
    "ChartDataset",
    "DenseSeries",
    "Guideline",
]
