"""Text and link normalization shared by the extractors.

Handles:
- Whitespace normalization (collapse runs of spaces/newlines to one space)
- Leading/trailing whitespace trimming
- Link absolutization against a source origin
- Case-insensitive location allow-list matching
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urljoin

_WHITESPACE_RE = re.compile(r"\s+")

_ABSOLUTE_PREFIXES = ("http://", "https://")


def normalize_whitespace(text: str) -> str:
    """Collapse multiple whitespace characters into a single space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def absolutize_link(origin: str, href: str | None) -> str:
    """Prefix a relative *href* with the source *origin*.

    A missing or empty href yields the bare origin. Hrefs that are already
    absolute are returned unchanged; scheme-relative ones take the origin's
    scheme.
    """
    origin = origin.rstrip("/")
    if href is None:
        return origin

    href = href.strip()
    if not href:
        return origin

    if href.startswith(_ABSOLUTE_PREFIXES):
        return href

    if href.startswith("//"):
        return urljoin(origin + "/", href)

    if href.startswith(("?", "#")):
        return origin + href

    return f"{origin}/{href.lstrip('/')}"


def matches_location(location: str, allow_list: Iterable[str]) -> bool:
    """True when *location* contains any allow-list term, ignoring case."""
    haystack = location.lower()
    return any(term.lower() in haystack for term in allow_list)
