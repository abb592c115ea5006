"""Per-source refresh job.

Composes the page fetcher and the source's extractor. Extraction runs in a
worker thread so request handlers keep running while a page is parsed.
``run()`` never raises: fetch and extract failures are logged with
structured fields and converted into an empty ``SourceRunResult`` whose
``outcome`` records why. Callers that only look at ``records`` cannot tell
a failure from an empty page.
"""

from __future__ import annotations

import asyncio
import logging
import time

from edu_feeds.extractors.base import BaseExtractor
from edu_feeds.integration.page_fetcher import PageFetcher
from edu_feeds.middleware.error_handler import ExtractError, FetchError
from edu_feeds.models.records import RefreshOutcome, SourceName, SourceRunResult

logger = logging.getLogger(__name__)


class SourceJob:
    """Fetch-then-extract pipeline for one upstream source.

    Parameters
    ----------
    url:
        Page to fetch.
    fetcher:
        Shared page fetcher.
    extractor:
        Extractor for this source; its ``source`` names the job.
    max_retries:
        Extra fetch attempts after a ``FetchError`` (0 disables retrying).
    backoff_seconds:
        Base delay between attempts; attempt *n* waits ``backoff * 2**n``.
    """

    def __init__(
        self,
        *,
        url: str,
        fetcher: PageFetcher,
        extractor: BaseExtractor,
        max_retries: int = 2,
        backoff_seconds: float = 1.0,
    ) -> None:
        self.url = url
        self._fetcher = fetcher
        self._extractor = extractor
        self._max_retries = max_retries
        self._backoff_seconds = backoff_seconds

    @property
    def source(self) -> SourceName:
        return self._extractor.source

    async def run(self) -> SourceRunResult:
        """Fetch and extract this source. Never raises FetchError/ExtractError."""
        start = time.monotonic()

        try:
            markup = await self._fetch_with_retries()
        except FetchError as exc:
            return self._finish(start, RefreshOutcome.FETCH_FAILED, error=exc.message)

        try:
            records = await asyncio.to_thread(self._extractor.extract, markup)
        except ExtractError as exc:
            return self._finish(start, RefreshOutcome.EXTRACT_FAILED, error=exc.message)

        if not records:
            return self._finish(start, RefreshOutcome.EMPTY)
        return self._finish(start, RefreshOutcome.OK, records=tuple(records))

    async def _fetch_with_retries(self) -> str:
        """Fetch the page, retrying FetchError with exponential backoff."""
        attempts = self._max_retries + 1
        attempt = 0
        while True:
            try:
                return await self._fetcher.fetch(self.url)
            except FetchError as exc:
                if attempt >= self._max_retries:
                    raise
                backoff = self._backoff_seconds * 2**attempt
                logger.warning(
                    "Fetch failed for %s (attempt %d/%d), retrying in %.1fs",
                    self.source.value,
                    attempt + 1,
                    attempts,
                    backoff,
                    extra={
                        "source": self.source.value,
                        "target_url": self.url,
                        "attempt": attempt + 1,
                        "error_reason": exc.message,
                    },
                )
                await asyncio.sleep(backoff)
                attempt += 1

    def _finish(
        self,
        start: float,
        outcome: RefreshOutcome,
        *,
        records: tuple = (),
        error: str | None = None,
    ) -> SourceRunResult:
        duration_ms = round((time.monotonic() - start) * 1000, 2)
        extra = {
            "source": self.source.value,
            "target_url": self.url,
            "outcome": outcome.value,
            "records_extracted": len(records),
            "duration_ms": duration_ms,
        }
        if error is not None:
            extra["error_reason"] = error
            logger.warning(
                "Scrape of %s failed (%s): %s", self.source.value, outcome.value, error,
                extra=extra,
            )
        elif outcome is RefreshOutcome.EMPTY:
            logger.warning("Scrape of %s matched no records", self.source.value, extra=extra)
        else:
            logger.info(
                "Scraped %d %s", len(records), self.source.value, extra=extra,
            )

        return SourceRunResult(
            source=self.source,
            records=records,
            outcome=outcome,
            error=error,
            duration_ms=duration_ms,
        )
