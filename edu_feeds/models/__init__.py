"""Public models for the feed service."""

from edu_feeds.models.records import (
    Conference,
    Course,
    Record,
    RefreshOutcome,
    SourceName,
    SourceRunResult,
    SourceStatus,
)

__all__ = [
    "Conference",
    "Course",
    "Record",
    "RefreshOutcome",
    "SourceName",
    "SourceRunResult",
    "SourceStatus",
]
