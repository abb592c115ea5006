"""Configuration module: settings and upstream sources."""

from edu_feeds.config.settings import FeedSettings
from edu_feeds.config.sources import SourceConfig, default_sources, load_sources

__all__ = [
    "FeedSettings",
    "SourceConfig",
    "default_sources",
    "load_sources",
]
