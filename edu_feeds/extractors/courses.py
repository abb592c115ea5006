"""Course catalogue extractor.

Every ``.cds-ProductCard-header`` node on the catalogue page becomes one
Course. The card's full text is the title; the nested anchor supplies the
link. A card without an anchor still produces a record whose url is the bare
origin, so partial cards are kept rather than dropped.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from edu_feeds.extractors.base import BaseExtractor
from edu_feeds.models.normalizer import absolutize_link
from edu_feeds.models.records import Course, SourceName

logger = logging.getLogger(__name__)

CARD_SELECTOR = ".cds-ProductCard-header"


class CourseExtractor(BaseExtractor):
    """Extractor for the ``courses`` source."""

    source: SourceName = SourceName.COURSES

    def extract_from(self, soup: BeautifulSoup) -> list[Course]:
        courses: list[Course] = []
        for card in soup.select(CARD_SELECTOR):
            href = self.attr_of(card, "href", selector="a")
            courses.append(
                Course(
                    title=self.text_of(card),
                    url=absolutize_link(self.origin, href),
                )
            )

        logger.debug("Matched %d course cards", len(courses))
        return courses
