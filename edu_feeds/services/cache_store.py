"""In-memory last-known-good store for extracted records.

One entry per source, each an immutable tuple. ``replace_if_non_empty``
swaps the whole tuple in a single assignment, so a reader either sees the
previous snapshot or the new one, never a partial update. Empty candidates
never overwrite an entry: the store prefers stale data to no data.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from edu_feeds.models.records import Record, SourceName, SourceRunResult, SourceStatus

logger = logging.getLogger(__name__)


class CacheStore:
    """Per-source record cache with replace-on-success semantics."""

    def __init__(self, sources: Sequence[SourceName] = tuple(SourceName)) -> None:
        self._entries: dict[SourceName, tuple[Record, ...]] = {
            source: () for source in sources
        }
        self._status: dict[SourceName, SourceStatus] = {
            source: SourceStatus(source=source) for source in sources
        }

    def get(self, source: SourceName) -> tuple[Record, ...]:
        """Return the current snapshot for *source* (empty before first success)."""
        return self._entries.get(source, ())

    def replace_if_non_empty(
        self, source: SourceName, candidate: Sequence[Record]
    ) -> bool:
        """Overwrite the entry for *source* when *candidate* has records.

        Returns ``True`` if the entry was replaced, ``False`` if the previous
        snapshot was kept.
        """
        snapshot = tuple(candidate)
        status = self._status.setdefault(source, SourceStatus(source=source))

        if not snapshot:
            status.stale_keeps += 1
            logger.warning(
                "No %s were scraped, keeping existing cached %s",
                source.value,
                source.value,
                extra={"source": source.value, "record_count": len(self.get(source))},
            )
            return False

        self._entries[source] = snapshot
        status.last_replaced_at = datetime.now(timezone.utc)
        logger.info(
            "%s updated successfully",
            source.value.capitalize(),
            extra={"source": source.value, "record_count": len(snapshot)},
        )
        return True

    def record_result(self, result: SourceRunResult) -> None:
        """Remember the diagnostic outcome of the latest run for a source."""
        status = self._status.setdefault(result.source, SourceStatus(source=result.source))
        status.attempts += 1
        status.last_outcome = result.outcome
        status.last_error = result.error
        status.last_attempt_at = datetime.now(timezone.utc)

    def apply(self, result: SourceRunResult) -> bool:
        """Record *result* and replace the entry if it carries records."""
        self.record_result(result)
        return self.replace_if_non_empty(result.source, result.records)

    def get_stats(self) -> dict:
        """Per-source diagnostic status as a JSON-friendly dict."""
        stats: dict[str, dict] = {}
        for source, status in self._status.items():
            stats[source.value] = {
                "record_count": len(self.get(source)),
                "last_outcome": status.last_outcome.value if status.last_outcome else None,
                "last_error": status.last_error,
                "last_attempt_at": _iso(status.last_attempt_at),
                "last_replaced_at": _iso(status.last_replaced_at),
                "attempts": status.attempts,
                "stale_keeps": status.stale_keeps,
            }
        return stats


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
