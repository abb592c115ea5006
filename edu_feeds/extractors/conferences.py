"""Conference listing extractor.

Reads the rows of the ``.eventslist`` table. The first row is always
skipped as a header, whatever it contains. Remaining rows map columns to
fields:

    1 -> date, 2 -> title (anchor text) and link (anchor href), 3 -> location

Cell text is trimmed but otherwise kept as displayed. Only rows whose
location contains one of the allow-list terms (case insensitive) are
returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bs4 import BeautifulSoup

from edu_feeds.extractors.base import BaseExtractor
from edu_feeds.models.normalizer import absolutize_link, matches_location
from edu_feeds.models.records import Conference, SourceName

logger = logging.getLogger(__name__)

ROW_SELECTOR = ".eventslist tr"

_DATE_CELL = "td:nth-child(1)"
_TITLE_ANCHOR = "td:nth-child(2) a"
_LOCATION_CELL = "td:nth-child(3)"

DEFAULT_LOCATIONS = ("bangalore", "bengaluru")


class ConferenceExtractor(BaseExtractor):
    """Extractor for the ``conferences`` source."""

    source: SourceName = SourceName.CONFERENCES

    def __init__(self, origin: str, locations: Iterable[str] = DEFAULT_LOCATIONS) -> None:
        super().__init__(origin)
        self.locations = tuple(term.lower() for term in locations)

    def extract_from(self, soup: BeautifulSoup) -> list[Conference]:
        rows = soup.select(ROW_SELECTOR)
        conferences: list[Conference] = []
        dropped = 0

        for row in rows[1:]:
            location = self.text_of(row, _LOCATION_CELL, collapse=False)
            if not matches_location(location, self.locations):
                dropped += 1
                continue

            conferences.append(
                Conference(
                    title=self.text_of(row, _TITLE_ANCHOR, collapse=False),
                    date=self.text_of(row, _DATE_CELL, collapse=False),
                    location=location,
                    link=absolutize_link(
                        self.origin, self.attr_of(row, "href", selector=_TITLE_ANCHOR)
                    ),
                )
            )

        logger.debug(
            "Matched %d conference rows, dropped %d outside %s",
            len(conferences),
            dropped,
            ", ".join(self.locations),
        )
        return conferences
