from __future__ import annotations

from burndown.models.sprint import ChartDataset
from burndown.renderers.chart import ACTUAL_LABEL, IDEAL_LABEL, close_chart, render_chart, write_chart


def test_render_chart_draws_actual_and_ideal_lines() -> None:
    dataset = ChartDataset(labels=[1, 2, 3, 4], actual=[10, 7], ideal=[10, 6.67, 3.33, 0])

    figure = render_chart(dataset, title="Sprint 3 Burndown")
    try:
        ax = figure.axes[0]
        lines = {line.get_label(): line for line in ax.get_lines()}

        assert set(lines) == {ACTUAL_LABEL, IDEAL_LABEL}
        assert list(lines[ACTUAL_LABEL].get_xdata()) == [1, 2]
        assert list(lines[IDEAL_LABEL].get_ydata()) == [10, 6.67, 3.33, 0]
        assert ax.get_ylim()[0] == 0
        assert ax.get_title() == "Sprint 3 Burndown"
    finally:
        close_chart(figure)


def test_write_chart_creates_missing_directory(tmp_path) -> None:
    figure = render_chart(ChartDataset(labels=[1, 2], actual=[0, 0], ideal=[0, 0]))
    try:
        path = write_chart(figure, tmp_path / "out", "sprint3-latest")
    finally:
        close_chart(figure)

    assert path == tmp_path / "out" / "sprint3-latest-burndown.png"
    assert path.read_bytes().startswith(b"\x89PNG")
