"""Notion-backed store of sprint windows, backlog estimates and daily snapshots."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from dateutil import parser as date_parser

from burndown.clients.contracts import FetchState
from burndown.clients.notion import sanitize_log_extra
from burndown.config.settings import settings
from burndown.models.sprint import Snapshot, SprintWindow
from burndown.services.errors import DataSourceError

logger = logging.getLogger(__name__)

DAILY_PROPERTY_NAME = "Name"
DAILY_PROPERTY_SPRINT = "Sprint"
DAILY_PROPERTY_POINTS = "Points"
DAILY_PROPERTY_DATE = "Date"


def sprint_label(sprint_id: int) -> str:
    return f"Sprint {sprint_id}"


@dataclass(slots=True)
class StoreConfig:
    """Database ids and property names of the Notion workspace."""

    backlog_db: Optional[str] = field(default_factory=lambda: settings.NOTION_DB_BACKLOG)
    sprint_summary_db: Optional[str] = field(default_factory=lambda: settings.NOTION_DB_SPRINT_SUMMARY)
    daily_summary_db: Optional[str] = field(default_factory=lambda: settings.NOTION_DB_DAILY_SUMMARY)
    sprint_property: str = field(default_factory=lambda: settings.NOTION_PROPERTY_SPRINT)
    estimate_property: str = field(default_factory=lambda: settings.NOTION_PROPERTY_ESTIMATE)
    status_exclude_pattern: str = field(default_factory=lambda: settings.NOTION_PROPERTY_PATTERN_STATUS_EXCLUDE)
    page_size: int = field(default_factory=lambda: settings.NOTION_PAGE_SIZE)
    max_pages: int = field(default_factory=lambda: settings.NOTION_MAX_PAGES)


class SprintStore:
    """Reads and writes the sprint data the burndown is computed from."""

    def __init__(self, notion_client: Any, config: Optional[StoreConfig] = None) -> None:
        self._client = notion_client
        self._config = config or StoreConfig()
        self._status_exclude = re.compile(self._config.status_exclude_pattern)

    async def fetch_sprint_window(self) -> SprintWindow:
        """Return the sprint with the highest sprint number."""

        database_id = self._require_database(self._config.sprint_summary_db, "NOTION_DB_SPRINT_SUMMARY")
        response = await self._client.query_database(
            database_id,
            sorts=[{"property": self._config.sprint_property, "direction": "descending"}],
            page_size=1,
        )
        self._raise_on_failure(response, "sprint summary query")
        if response.state == FetchState.EMPTY or not response.data.results:
            raise DataSourceError("Sprint summary database has no sprints")

        properties = response.data.results[0].get("properties") or {}
        sprint_id = _number_property(properties.get(self._config.sprint_property))
        start = _date_property(properties.get("Start"))
        end = _date_property(properties.get("End"))
        if sprint_id is None or start is None or end is None:
            raise DataSourceError("Latest sprint is missing its number, Start or End")

        window = SprintWindow(sprint_id=int(sprint_id), start=start, end=end)
        logger.info(
            "Found latest sprint",
            extra={"sprint": window.sprint_id, "start": start.isoformat(), "end": end.isoformat()},
        )
        return window

    async def fetch_backlog_remaining_points(self, sprint_id: int) -> float:
        """Sum estimates of the sprint's stories whose status is not excluded."""

        database_id = self._require_database(self._config.backlog_db, "NOTION_DB_BACKLOG")
        stories = await self._query_all(
            database_id,
            filter={"property": self._config.sprint_property, "select": {"equals": sprint_label(sprint_id)}},
        )

        points = 0.0
        skipped = 0
        for story in stories:
            properties = story.get("properties") or {}
            status = _select_name(properties.get("Status"))
            if status is not None and self._status_exclude.search(status):
                continue
            estimate = _number_property(properties.get(self._config.estimate_property))
            if estimate is None:
                skipped += 1
                continue
            points += estimate

        logger.info(
            "Counted points left in sprint",
            extra={"sprint": sprint_id, "stories": len(stories), "unestimated": skipped, "points_left": points},
        )
        return points

    async def record_daily_snapshot(self, sprint_id: int, day: date, points: float) -> None:
        database_id = self._require_database(self._config.daily_summary_db, "NOTION_DB_DAILY_SUMMARY")
        day_text = day.isoformat()
        properties = {
            DAILY_PROPERTY_NAME: {"title": [{"text": {"content": f"{sprint_label(sprint_id)} - {day_text}"}}]},
            DAILY_PROPERTY_SPRINT: {"number": sprint_id},
            DAILY_PROPERTY_POINTS: {"number": points},
            DAILY_PROPERTY_DATE: {"date": {"start": day_text, "end": None}},
        }
        response = await self._client.create_page(database_id, properties)
        self._raise_on_failure(response, "daily summary write")
        logger.info("Updated daily summary table", extra={"sprint": sprint_id, "date": day_text, "points_left": points})

    async def fetch_daily_snapshots(self, sprint_id: int) -> list[Snapshot]:
        database_id = self._require_database(self._config.daily_summary_db, "NOTION_DB_DAILY_SUMMARY")
        rows = await self._query_all(
            database_id,
            filter={"property": DAILY_PROPERTY_SPRINT, "number": {"equals": sprint_id}},
            sorts=[{"property": DAILY_PROPERTY_DATE, "direction": "ascending"}],
        )

        snapshots: list[Snapshot] = []
        for row in rows:
            properties = row.get("properties") or {}
            day = _date_property(properties.get(DAILY_PROPERTY_DATE))
            points = _number_property(properties.get(DAILY_PROPERTY_POINTS))
            if day is None or points is None or points < 0:
                logger.warning(
                    "Skipping unreadable daily summary row",
                    extra={"sprint": sprint_id, "row_id": row.get("id")},
                )
                continue
            snapshots.append(Snapshot(date=day, points_remaining=points))
        return snapshots

    async def _query_all(
        self,
        database_id: str,
        *,
        filter: Optional[dict[str, Any]] = None,
        sorts: Optional[list[dict[str, Any]]] = None,
    ) -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = []
        cursor: Optional[str] = None
        fetched_pages = 0

        while fetched_pages < self._config.max_pages:
            response = await self._client.query_database(
                database_id,
                filter=filter,
                sorts=sorts,
                start_cursor=cursor,
                page_size=self._config.page_size,
            )
            self._raise_on_failure(response, "database query")
            fetched_pages += 1
            if response.state == FetchState.EMPTY:
                break

            rows.extend(response.data.results)
            if not response.data.has_more or not response.data.next_cursor:
                break
            cursor = response.data.next_cursor
        else:
            logger.warning(
                "Database query capped before the last page",
                extra={"database_id": database_id, "max_pages": self._config.max_pages, "rows": len(rows)},
            )

        return rows

    @staticmethod
    def _require_database(database_id: Optional[str], setting_name: str) -> str:
        if not database_id:
            raise DataSourceError(f"{setting_name} is not configured")
        return database_id

    @staticmethod
    def _raise_on_failure(response: Any, action: str) -> None:
        if response.state != FetchState.FAILED:
            return
        logger.warning(
            "Sprint store request failed",
            extra=sanitize_log_extra(action=action, status_code=response.status_code, error=response.error),
        )
        raise DataSourceError(f"Notion {action} failed: {response.error}")


def _number_property(prop: Any) -> Optional[float]:
    if not isinstance(prop, dict):
        return None
    value = prop.get("number")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _select_name(prop: Any) -> Optional[str]:
    if not isinstance(prop, dict):
        return None
    for kind in ("select", "status"):
        option = prop.get(kind)
        if isinstance(option, dict) and isinstance(option.get("name"), str):
            return option["name"]
    return None


def _date_property(prop: Any) -> Optional[date]:
    if not isinstance(prop, dict) or not isinstance(prop.get("date"), dict):
        return None
    raw = prop["date"].get("start")
    if not isinstance(raw, str):
        return None
    try:
        return date_parser.isoparse(raw).date()
    except (TypeError, ValueError):
        return None
