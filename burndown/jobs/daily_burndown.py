"""Daily burndown job entrypoint."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from burndown.orchestrator import BurndownOrchestrator


def parse_include_weekends(raw: Any) -> bool | None:
    """Anything other than an explicit false keeps weekends on the chart."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() != "false"


async def run_daily_burndown(
    *,
    orchestrator: BurndownOrchestrator | None = None,
    include_weekends: Any = None,
    output_dir: str | Path | None = None,
) -> dict[str, Any]:
    """Record today's remaining points and regenerate the sprint chart."""
    job_orchestrator = orchestrator or BurndownOrchestrator(
        include_weekends=parse_include_weekends(include_weekends),
        output_dir=output_dir,
    )
    return await job_orchestrator.run()
