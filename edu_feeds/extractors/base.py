"""Abstract base class for source-specific page extractors.

Each extractor handles a single SourceName and encapsulates the CSS
selectors needed to turn that source's markup into typed records. Extractors
are pure: no I/O and no state beyond their configuration.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from bs4 import BeautifulSoup, Tag

from edu_feeds.middleware.error_handler import ExtractError
from edu_feeds.models.normalizer import normalize_whitespace
from edu_feeds.models.records import Record, SourceName

logger = logging.getLogger(__name__)

# Parser backend handed to BeautifulSoup.
PARSER = "lxml"


class BaseExtractor(ABC):
    """Abstract base extractor that all source-specific extractors extend.

    Subclasses MUST set ``source`` as a class attribute and implement
    ``extract_from``. The helpers ``text_of`` and ``attr_of`` return empty
    strings / ``None`` for missing sub-elements so a partial row never fails
    the whole extraction.
    """

    source: SourceName

    def __init__(self, origin: str) -> None:
        self.origin = origin

    def extract(self, markup: str | bytes) -> list[Record]:
        """Parse *markup* and return the records it contains, in document order.

        Raises
        ------
        ExtractError
            If the markup cannot be loaded into a document at all. A document
            that loads but matches nothing yields an empty list.
        """
        soup = self.parse_document(markup)
        return self.extract_from(soup)

    @abstractmethod
    def extract_from(self, soup: BeautifulSoup) -> list[Record]:
        """Extract records from an already-parsed document."""
        ...

    def parse_document(self, markup: str | bytes) -> BeautifulSoup:
        """Load *markup* into a BeautifulSoup tree."""
        if not isinstance(markup, (str, bytes)):
            raise ExtractError(
                f"Expected markup as str or bytes, got {type(markup).__name__}",
                source=self.source.value,
            )
        try:
            return BeautifulSoup(markup, PARSER)
        except Exception as exc:
            raise ExtractError(
                f"Could not parse {self.source.value} markup: {exc}",
                source=self.source.value,
            ) from exc

    @staticmethod
    def text_of(
        node: Tag | None, selector: str | None = None, *, collapse: bool = True
    ) -> str:
        """Trimmed text of *node* (or its first *selector* match).

        With *collapse* (the default) internal whitespace runs become single
        spaces; otherwise only the edges are trimmed.
        """
        if node is not None and selector is not None:
            node = node.select_one(selector)
        if node is None:
            return ""
        text = node.get_text()
        return normalize_whitespace(text) if collapse else text.strip()

    @staticmethod
    def attr_of(node: Tag | None, attr: str, selector: str | None = None) -> str | None:
        """Attribute value of *node* (or its first *selector* match), if any."""
        if node is not None and selector is not None:
            node = node.select_one(selector)
        if node is None:
            return None
        value = node.get(attr)
        if isinstance(value, list):
            value = " ".join(value)
        return value
