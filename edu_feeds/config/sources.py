"""Upstream source models and YAML loader.

Provides typed Pydantic models for the external pages the service scrapes
and a loader function that parses the YAML config into those models.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from edu_feeds.models.records import SourceName

logger = logging.getLogger(__name__)


class SourceConfig(BaseModel):
    """Location of one upstream page and the origin used to absolutize links."""

    url: str = Field(min_length=1)
    origin: str = Field(min_length=1)
    location_allow_list: list[str] = []


_DEFAULT_SOURCES: dict[SourceName, SourceConfig] = {
    SourceName.COURSES: SourceConfig(
        url="https://www.coursera.org/courses?query=teaching&topic=Math%20and%20Logic",
        origin="https://www.coursera.org",
    ),
    SourceName.CONFERENCES: SourceConfig(
        url="https://www.conferencealerts.com/country-listing?country=India",
        origin="https://www.conferencealerts.com",
        location_allow_list=["bangalore", "bengaluru"],
    ),
}


def default_sources() -> dict[SourceName, SourceConfig]:
    """Return a fresh copy of the built-in source definitions."""
    return {name: config.model_copy(deep=True) for name, config in _DEFAULT_SOURCES.items()}


def load_sources(yaml_path: str) -> dict[SourceName, SourceConfig]:
    """Parse a sources YAML file into typed SourceConfig objects.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        A dict mapping every SourceName to its SourceConfig. Sources that are
        missing or invalid in the file fall back to the built-in definition.
    """
    path = Path(yaml_path)
    sources = default_sources()

    if not path.exists():
        logger.warning("Sources file not found at %s, using built-in defaults", yaml_path)
        return sources

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse sources YAML at %s: %s", yaml_path, exc)
        return sources

    if not isinstance(raw, dict) or not isinstance(raw.get("sources"), dict):
        logger.warning("Sources YAML missing 'sources' key, using built-in defaults")
        return sources

    for name, config in raw["sources"].items():
        try:
            source = SourceName(name)
        except ValueError:
            logger.error("Unknown source '%s' in %s, skipping", name, yaml_path)
            continue
        try:
            sources[source] = SourceConfig.model_validate(config)
        except Exception as exc:
            logger.error("Invalid config for source '%s': %s, keeping default", name, exc)

    return sources
