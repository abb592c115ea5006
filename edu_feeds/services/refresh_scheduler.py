"""Refresh cycle scheduler.

Runs every SourceJob once per cycle and feeds the results to the cache
store. Cycles are triggered at boot (awaited by the application lifespan)
and then on a crontab schedule via APScheduler.

State machine:
- Idle → Refreshing: ``run_cycle()`` called while no cycle is in progress
- Refreshing → Idle: every job of the cycle has finished
- A ``run_cycle()`` call made while Refreshing is skipped, not queued
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from enum import Enum

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from edu_feeds.models.records import RefreshOutcome, SourceName, SourceRunResult
from edu_feeds.services.cache_store import CacheStore
from edu_feeds.services.source_job import SourceJob

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "refresh_cycle"


class SchedulerState(str, Enum):
    """Externally observable scheduler states."""

    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshScheduler:
    """Serializes refresh cycles and drives them on a cron schedule.

    Args:
        jobs: One SourceJob per upstream source.
        store: Cache store receiving each job's result.
        cron: Crontab expression for scheduled cycles (daily at midnight by default).
        timezone: Timezone the crontab expression is evaluated in.
    """

    def __init__(
        self,
        *,
        jobs: Iterable[SourceJob],
        store: CacheStore,
        cron: str = "0 0 * * *",
        timezone: str = "UTC",
    ) -> None:
        self._jobs = list(jobs)
        self._store = store
        self._cron = cron
        self._timezone = timezone
        self._lock = asyncio.Lock()
        self._scheduler: AsyncIOScheduler | None = None

        self._cycles_completed = 0
        self._cycles_skipped = 0
        self._last_cycle_at: datetime | None = None

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.REFRESHING if self._lock.locked() else SchedulerState.IDLE

    @property
    def has_completed_cycle(self) -> bool:
        return self._cycles_completed > 0

    async def run_cycle(self) -> dict[SourceName, SourceRunResult] | None:
        """Run all jobs once and apply their results to the store.

        Returns the per-source results, or ``None`` if the call was skipped
        because another cycle is still running.
        """
        if self._lock.locked():
            self._cycles_skipped += 1
            logger.warning(
                "Refresh cycle already in progress, skipping this trigger",
                extra={"cycle_state": self.state.value},
            )
            return None

        async with self._lock:
            logger.info("Refresh cycle started", extra={"cycle_state": self.state.value})
            results = await asyncio.gather(*(self._run_job(job) for job in self._jobs))
            self._cycles_completed += 1
            self._last_cycle_at = datetime.now(timezone.utc)

        logger.info(
            "Refresh cycle finished: %s",
            ", ".join(f"{r.source.value}={r.outcome.value}" for r in results),
            extra={"cycle_state": self.state.value},
        )
        return {result.source: result for result in results}

    async def _run_job(self, job: SourceJob) -> SourceRunResult:
        """Run one job and apply its result as soon as it finishes."""
        try:
            result = await job.run()
        except Exception as exc:
            logger.exception(
                "Unexpected error refreshing %s",
                job.source.value,
                extra={"source": job.source.value, "error_reason": str(exc)},
            )
            result = SourceRunResult(
                source=job.source,
                outcome=RefreshOutcome.ERROR,
                error=f"{exc.__class__.__name__}: {exc}",
            )
        self._store.apply(result)
        return result

    def start(self) -> None:
        """Register the cron trigger and start APScheduler on the running loop."""
        if self._scheduler is not None:
            return

        trigger = CronTrigger.from_crontab(self._cron, timezone=self._timezone)
        self._scheduler = AsyncIOScheduler(timezone=self._timezone)
        self._scheduler.add_job(
            self.run_cycle,
            trigger=trigger,
            id=REFRESH_JOB_ID,
            name="Scheduled feed refresh",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        logger.info(
            "Refresh scheduled with cron '%s' (%s), next run at %s",
            self._cron,
            self._timezone,
            self.next_run_time,
        )

    def shutdown(self) -> None:
        """Stop the cron trigger. A cycle already running is not cancelled."""
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Refresh scheduler shut down")

    @property
    def next_run_time(self) -> datetime | None:
        if self._scheduler is None:
            return None
        job = self._scheduler.get_job(REFRESH_JOB_ID)
        return getattr(job, "next_run_time", None)

    def get_stats(self) -> dict:
        """Scheduler counters as a JSON-friendly dict."""
        next_run = self.next_run_time
        return {
            "state": self.state.value,
            "cron": self._cron,
            "timezone": self._timezone,
            "cycles_completed": self._cycles_completed,
            "cycles_skipped": self._cycles_skipped,
            "last_cycle_at": self._last_cycle_at.isoformat() if self._last_cycle_at else None,
            "next_run_at": next_run.isoformat() if next_run else None,
        }
