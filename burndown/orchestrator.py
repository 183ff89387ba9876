"""Daily burndown run: record today's points, then chart the sprint so far."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo

from burndown.clients.notion import NotionClient, sanitize_for_log, sanitize_log_extra
from burndown.config.settings import settings
from burndown.renderers.chart import close_chart, render_chart, write_chart
from burndown.services.calendar import Calendar
from burndown.services.dataset import assemble_dataset
from burndown.sources.sprint_store import SprintStore

logger = logging.getLogger(__name__)


def default_calendar() -> Calendar:
    return Calendar(timezone=ZoneInfo(settings.TIMEZONE))


def _utc_now() -> datetime:
    return datetime.now(UTC)


class BurndownOrchestrator:
    """Runs the store reads/writes, the burndown calculation and the chart export in order."""

    def __init__(
        self,
        *,
        client_factory: Callable[[], Any] = NotionClient,
        store_factory: Callable[[Any], Any] = SprintStore,
        calendar: Optional[Calendar] = None,
        now_provider: Callable[[], datetime] = _utc_now,
        include_weekends: Optional[bool] = None,
        output_dir: Optional[str | Path] = None,
        chart_renderer: Callable[..., Any] = render_chart,
        chart_writer: Callable[..., Path] = write_chart,
    ) -> None:
        self._client_factory = client_factory
        self._store_factory = store_factory
        self._calendar = calendar or default_calendar()
        self._now_provider = now_provider
        self._include_weekends = settings.INCLUDE_WEEKENDS if include_weekends is None else include_weekends
        self._output_dir = Path(output_dir or settings.OUTPUT_DIR)
        self._chart_renderer = chart_renderer
        self._chart_writer = chart_writer

    async def run(self) -> dict[str, Any]:
        run_stats: dict[str, Any] = {
            "started_at": self._now_provider().isoformat(),
            "include_weekends": self._include_weekends,
            "sprint": None,
            "points_remaining": None,
            "dataset": None,
            "charts": [],
            "errors": [],
        }
        logger.info("Burndown run started", extra={"include_weekends": self._include_weekends})

        try:
            async with self._client_factory() as client:
                await self._run_steps(self._store_factory(client), run_stats)
        except Exception as exc:
            sanitized_error = sanitize_for_log(str(exc), key="error")
            logger.exception(
                "Burndown run failed",
                extra=sanitize_log_extra(sprint=run_stats["sprint"], error=sanitized_error),
            )
            run_stats["errors"].append(f"{type(exc).__name__}: {sanitized_error}")

        run_stats["completed_at"] = self._now_provider().isoformat()
        run_stats["success"] = not run_stats["errors"]
        logger.info(
            "Burndown run completed",
            extra=sanitize_log_extra(
                success=run_stats["success"],
                sprint=run_stats["sprint"],
                charts=run_stats["charts"],
                errors=run_stats["errors"],
            ),
        )
        return run_stats

    async def _run_steps(self, store: Any, run_stats: dict[str, Any]) -> None:
        window = await store.fetch_sprint_window()
        run_stats["sprint"] = window.sprint_id

        points_left = await store.fetch_backlog_remaining_points(window.sprint_id)
        run_stats["points_remaining"] = points_left

        today = self._calendar.today(self._now_provider())
        await store.record_daily_snapshot(window.sprint_id, today, points_left)

        snapshots = await store.fetch_daily_snapshots(window.sprint_id)
        dataset = assemble_dataset(
            window,
            snapshots,
            today_offset=self._calendar.days_between(window.start, today),
            include_weekends=self._include_weekends,
            calendar=self._calendar,
        )
        run_stats["dataset"] = dataset.as_dict()
        logger.info(
            "Computed burndown dataset",
            extra={"sprint": window.sprint_id, "labels": dataset.labels, "actual": dataset.actual, "ideal": dataset.ideal},
        )

        run_stats["charts"] = self._export_chart(window.sprint_id, dataset)

    def _export_chart(self, sprint_id: int, dataset: Any) -> list[str]:
        figure = self._chart_renderer(dataset)
        try:
            stamp = int(self._now_provider().timestamp() * 1000)
            paths = [
                self._chart_writer(figure, self._output_dir, f"sprint{sprint_id}-{stamp}"),
                self._chart_writer(figure, self._output_dir, f"sprint{sprint_id}-latest"),
            ]
        finally:
            close_chart(figure)
        return [str(path) for path in paths]
