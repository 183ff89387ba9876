"""Render a burndown dataset as a two-line PNG chart."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from burndown.config.settings import settings  # noqa: E402
from burndown.models.sprint import ChartDataset  # noqa: E402

logger = logging.getLogger(__name__)

ACTUAL_LABEL = "Burndown"
IDEAL_LABEL = "Ideal"


def render_chart(
    dataset: ChartDataset,
    *,
    title: Optional[str] = None,
    width_px: Optional[int] = None,
    height_px: Optional[int] = None,
    dpi: Optional[int] = None,
) -> Figure:
    """Plot the actual and ideal series against the day labels."""

    dpi = dpi or settings.CHART_DPI
    width_px = width_px or settings.CHART_WIDTH_PX
    height_px = height_px or settings.CHART_HEIGHT_PX

    fig, ax = plt.subplots(figsize=(width_px / dpi, height_px / dpi), dpi=dpi)
    ax.plot(dataset.labels[: len(dataset.actual)], dataset.actual, label=ACTUAL_LABEL, color="#ef4444")
    ax.plot(dataset.labels[: len(dataset.ideal)], dataset.ideal, label=IDEAL_LABEL, color="#cad0d6")

    top = max([*dataset.actual, *dataset.ideal, 0.0])
    ax.set_ylim(bottom=0, top=top or 1)
    ax.set_title(title or settings.CHART_TITLE)
    ax.set_xlabel("Day")
    ax.set_ylabel("Points Left")
    fig.tight_layout()
    return fig


def write_chart(figure: Figure, directory: str | Path, filename_prefix: str) -> Path:
    """Save `figure` as `{filename_prefix}-burndown.png` under `directory`."""

    output_dir = Path(directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{filename_prefix}-burndown.png"
    figure.savefig(path, facecolor="white")
    logger.info("Wrote burndown chart", extra={"path": str(path)})
    return path


def close_chart(figure: Figure) -> None:
    plt.close(figure)
