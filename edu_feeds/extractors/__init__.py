"""Page extractors package: pluggable registry + base class."""

from edu_feeds.extractors.base import BaseExtractor
from edu_feeds.extractors.conferences import ConferenceExtractor
from edu_feeds.extractors.courses import CourseExtractor
from edu_feeds.extractors.registry import ExtractorRegistry, build_registry

__all__ = [
    "BaseExtractor",
    "ConferenceExtractor",
    "CourseExtractor",
    "ExtractorRegistry",
    "build_registry",
]
