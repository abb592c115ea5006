"""Refresh services: source jobs, cache store and scheduler."""

from edu_feeds.services.cache_store import CacheStore
from edu_feeds.services.refresh_scheduler import RefreshScheduler, SchedulerState
from edu_feeds.services.source_job import SourceJob

__all__ = [
    "CacheStore",
    "RefreshScheduler",
    "SchedulerState",
    "SourceJob",
]
