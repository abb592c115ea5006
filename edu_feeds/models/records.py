"""Pydantic record models and in-memory state models for refresh runs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict


class SourceName(str, Enum):
    """Upstream sources scraped by the service."""

    COURSES = "courses"
    CONFERENCES = "conferences"


class Course(BaseModel):
    """One course card from the course catalogue page."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str


class Conference(BaseModel):
    """One row of the conference listing table."""

    model_config = ConfigDict(frozen=True)

    title: str
    date: str
    location: str
    link: str


Record = Union[Course, Conference]


class RefreshOutcome(str, Enum):
    """Why a source run produced (or did not produce) records."""

    OK = "ok"
    FETCH_FAILED = "fetch_failed"
    EXTRACT_FAILED = "extract_failed"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class SourceRunResult:
    """Result of one SourceJob run."""

    source: SourceName
    records: tuple[Record, ...] = ()
    outcome: RefreshOutcome = RefreshOutcome.EMPTY
    error: str | None = None
    duration_ms: float = 0.0


@dataclass
class SourceStatus:
    """Diagnostic state tracked per source by the cache store."""

    source: SourceName
    last_outcome: RefreshOutcome | None = None
    last_error: str | None = None
    last_attempt_at: datetime | None = None
    last_replaced_at: datetime | None = None
    attempts: int = 0
    stale_keeps: int = 0
