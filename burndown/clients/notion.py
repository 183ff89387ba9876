"""Async Notion API client for sprint and snapshot databases."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import httpx

from burndown.clients.contracts import FetchResult, FetchState, PageContract, QueryContract, QueryPage
from burndown.config.settings import settings

logger = logging.getLogger(__name__)

_REDACTED_VALUE = "***REDACTED***"
_SENSITIVE_KEYS = (
    "authorization",
    "token",
    "api_key",
    "apikey",
    "secret",
    "password",
    "notion_key",
)
_TOKEN_PATTERNS = (
    re.compile(r"(?i)(bearer\s+)[^\s,;]+"),
    re.compile(r"(?i)(token\s*[=:]\s*)[^\s,;]+"),
    re.compile(r"()\b(?:secret|ntn)_[A-Za-z0-9]{8,}"),
)


def sanitize_for_log(value: Any, *, key: Optional[str] = None) -> Any:
    """Return a recursively sanitized copy of log payloads."""

    if isinstance(value, dict):
        sanitized: dict[str, Any] = {}
        for raw_key, raw_value in value.items():
            field = str(raw_key)
            if _contains_keyword(field, _SENSITIVE_KEYS):
                sanitized[field] = _REDACTED_VALUE
                continue
            sanitized[field] = sanitize_for_log(raw_value, key=field)
        return sanitized

    if isinstance(value, (list, tuple, set)):
        return [sanitize_for_log(item, key=key) for item in value]

    if isinstance(value, str):
        return _redact_text(value)

    return value


def sanitize_log_extra(**kwargs: Any) -> dict[str, Any]:
    """Helper for `extra=` payloads in structured logging."""

    return {key: sanitize_for_log(value, key=key) for key, value in kwargs.items()}


def _contains_keyword(field_name: str, keywords: tuple[str, ...]) -> bool:
    lowered = field_name.lower()
    return any(keyword in lowered for keyword in keywords)


def _redact_text(raw: str) -> str:
    redacted = raw
    for pattern in _TOKEN_PATTERNS:
        redacted = pattern.sub(rf"\1{_REDACTED_VALUE}", redacted)
    return redacted


class NotionClient:
    """Typed Notion API client returning `FetchResult` contracts instead of raising."""

    def __init__(
        self,
        *,
        token: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        base_url: Optional[str] = None,
        transport: Optional[Any] = None,
    ) -> None:
        self._token = token or settings.NOTION_KEY
        self._api_version = api_version or settings.NOTION_API_VERSION
        self._timeout_seconds = timeout_seconds or settings.NOTION_TIMEOUT_SECONDS
        self._base_url = base_url or settings.NOTION_BASE_URL
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "NotionClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def query_database(
        self,
        database_id: str,
        *,
        filter: Optional[dict[str, Any]] = None,
        sorts: Optional[list[dict[str, Any]]] = None,
        start_cursor: Optional[str] = None,
        page_size: int = 100,
    ) -> QueryContract:
        """Read one cursor page of `database_id` rows."""

        body: dict[str, Any] = {"page_size": page_size}
        if filter:
            body["filter"] = filter
        if sorts:
            body["sorts"] = sorts
        if start_cursor:
            body["start_cursor"] = start_cursor

        response = await self._request("POST", f"/v1/databases/{database_id}/query", json=body)
        if response.state != FetchState.OK:
            return FetchResult(state=response.state, status_code=response.status_code, error=response.error)

        payload = response.data if isinstance(response.data, dict) else {}
        results = payload.get("results") if isinstance(payload.get("results"), list) else []
        page = QueryPage(
            results=results,
            has_more=bool(payload.get("has_more")),
            next_cursor=payload.get("next_cursor") if isinstance(payload.get("next_cursor"), str) else None,
        )
        state = FetchState.OK if results else FetchState.EMPTY
        return FetchResult(state=state, data=page, status_code=response.status_code)

    async def create_page(self, database_id: str, properties: dict[str, Any]) -> PageContract:
        body = {"parent": {"database_id": database_id}, "properties": properties}
        return await self._request("POST", "/v1/pages", json=body)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
    ) -> FetchResult[Any]:
        client = await self._ensure_client()

        try:
            response = await client.request(method, path, json=json)

            if response.status_code == 429:
                logger.warning(
                    "Notion API rate limit encountered",
                    extra=sanitize_log_extra(
                        path=path,
                        status_code=response.status_code,
                        retry_after_seconds=response.headers.get("retry-after"),
                    ),
                )
                return FetchResult(
                    state=FetchState.FAILED,
                    error="Notion rate limit encountered (429)",
                    status_code=response.status_code,
                )

            response.raise_for_status()
            return FetchResult(state=FetchState.OK, data=response.json(), status_code=response.status_code)
        except httpx.HTTPError as exc:
            status_code = getattr(getattr(exc, "response", None), "status_code", None)
            logger.warning(
                "Notion request failed",
                extra=sanitize_log_extra(path=path, error=str(exc), status_code=status_code),
            )
            return FetchResult(state=FetchState.FAILED, error=str(exc), status_code=status_code)
        except ValueError as exc:
            logger.warning(
                "Notion returned a non-JSON body",
                extra=sanitize_log_extra(path=path, error=str(exc), status_code=response.status_code),
            )
            return FetchResult(state=FetchState.FAILED, error=str(exc), status_code=response.status_code)

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client:
            return self._client

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Notion-Version": self._api_version,
            "User-Agent": settings.USER_AGENT,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout_seconds,
            transport=self._transport,
        )
        return self._client
