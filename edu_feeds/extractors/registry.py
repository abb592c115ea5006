"""Pluggable extractor registry.

Maps ``SourceName`` → ``BaseExtractor`` instance. Adding a new source
requires only creating an extractor subclass and calling ``register()``.
"""

from __future__ import annotations

import logging

from edu_feeds.config.sources import SourceConfig
from edu_feeds.extractors.base import BaseExtractor
from edu_feeds.extractors.conferences import DEFAULT_LOCATIONS, ConferenceExtractor
from edu_feeds.extractors.courses import CourseExtractor
from edu_feeds.middleware.error_handler import SourceNotFoundError
from edu_feeds.models.records import SourceName

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """Registry that maps sources to their extractor implementations."""

    def __init__(self) -> None:
        self._extractors: dict[SourceName, BaseExtractor] = {}

    def register(self, extractor: BaseExtractor) -> None:
        """Register an extractor for its declared ``source``.

        Raises
        ------
        ValueError
            If an extractor for the same source is already registered.
        """
        source = extractor.source
        if source in self._extractors:
            raise ValueError(
                f"Extractor for source '{source.value}' is already registered"
            )
        self._extractors[source] = extractor
        logger.info("Registered extractor for source '%s'", source.value)

    def get(self, source: SourceName) -> BaseExtractor:
        """Return the extractor for *source*.

        Raises
        ------
        SourceNotFoundError
            If no extractor is registered for the given source.
        """
        try:
            return self._extractors[source]
        except KeyError:
            raise SourceNotFoundError(
                f"No extractor registered for source '{source.value}'",
                source=source.value,
            ) from None

    def list_sources(self) -> list[SourceName]:
        """Return a list of all registered sources."""
        return list(self._extractors.keys())


def build_registry(sources: dict[SourceName, SourceConfig]) -> ExtractorRegistry:
    """Create a registry holding the extractor for every configured source."""
    registry = ExtractorRegistry()
    if SourceName.COURSES in sources:
        registry.register(CourseExtractor(sources[SourceName.COURSES].origin))
    if SourceName.CONFERENCES in sources:
        config = sources[SourceName.CONFERENCES]
        registry.register(
            ConferenceExtractor(
                config.origin,
                locations=config.location_allow_list or DEFAULT_LOCATIONS,
            )
        )
    return registry
