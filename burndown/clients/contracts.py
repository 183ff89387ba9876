"""Typed result contracts returned by the Notion client."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class FetchState(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(slots=True)
class FetchResult(Generic[T]):
    """Outcome of one Notion request."""

    state: FetchState
    data: Optional[T] = None
    status_code: Optional[int] = None
    error: Optional[str] = None


@dataclass(slots=True)
class QueryPage:
    """One cursor page of a database query."""

    results: list[dict[str, Any]] = field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None


QueryContract = FetchResult[QueryPage]
PageContract = FetchResult[dict[str, Any]]
