"""Shared test fixtures, markup builders and hypothesis strategies."""

from __future__ import annotations

from collections.abc import Iterable

import httpx
import pytest
from hypothesis import strategies as st

from edu_feeds.config.settings import FeedSettings
from edu_feeds.extractors.conferences import ConferenceExtractor
from edu_feeds.extractors.courses import CourseExtractor
from edu_feeds.middleware.error_handler import FetchError
from edu_feeds.models.records import Conference, Course, SourceName
from edu_feeds.services.cache_store import CacheStore

COURSE_ORIGIN = "https://courses.example.org"
CONFERENCE_ORIGIN = "https://conferences.example.org"
COURSE_URL = f"{COURSE_ORIGIN}/courses?query=teaching"
CONFERENCE_URL = f"{CONFERENCE_ORIGIN}/country-listing?country=India"


# ---------------------------------------------------------------------------
# Markup builders
# ---------------------------------------------------------------------------


def course_card(title: str, href: str | None = "/learn/x") -> str:
    anchor = f'<a href="{href}">{title}</a>' if href is not None else title
    return f'<div class="cds-ProductCard-header"><h3>{anchor}</h3></div>'


def courses_page(cards: Iterable[str]) -> str:
    return "<html><body><main>" + "".join(cards) + "</main></body></html>"


def conference_row(
    date: str, title: str, location: str, href: str | None = "/event/1"
) -> str:
    anchor = f'<a href="{href}">{title}</a>' if href is not None else title
    return f"<tr><td>{date}</td><td>{anchor}</td><td>{location}</td></tr>"


def conferences_page(rows: Iterable[str], header: str | None = None) -> str:
    header = header if header is not None else (
        "<tr><th>Date</th><th>Conference</th><th>Venue</th></tr>"
    )
    return (
        '<html><body><table class="eventslist">'
        + header
        + "".join(rows)
        + "</table></body></html>"
    )


THREE_COURSES_HTML = courses_page([
    course_card("Algebra for Teachers", "/learn/algebra"),
    course_card("Geometry   Basics", "/learn/geometry"),
    course_card("Teaching Calculus", "/learn/calculus"),
])

TWO_CONFERENCES_HTML = conferences_page([
    conference_row("12 Jan 2026", "Math Education Summit", "Bengaluru, Karnataka", "/event/101"),
    conference_row("20 Feb 2026", "STEM Teaching Forum", "BANGALORE, India", "/event/102"),
    conference_row("03 Mar 2026", "Pedagogy Expo", "Mumbai, Maharashtra", "/event/103"),
])


# ---------------------------------------------------------------------------
# Doubles
# ---------------------------------------------------------------------------


class StubFetcher:
    """Page fetcher double replaying scripted bodies or FetchErrors per URL."""

    def __init__(self, responses: dict[str, list[str | Exception]] | None = None) -> None:
        self.responses = {url: list(items) for url, items in (responses or {}).items()}
        self.calls: list[str] = []

    def script(self, url: str, *items: str | Exception) -> None:
        self.responses.setdefault(url, []).extend(items)

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        queue = self.responses.get(url)
        if not queue:
            raise FetchError(f"No scripted response for {url}", target_url=url)
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def aclose(self) -> None:
        return None


def mock_http_client(routes: dict[str, httpx.Response | Exception]) -> httpx.AsyncClient:
    """An AsyncClient whose transport answers from *routes* keyed by full URL."""

    def handler(request: httpx.Request) -> httpx.Response:
        outcome = routes.get(str(request.url))
        if outcome is None:
            return httpx.Response(404, text="not found")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings(tmp_path) -> FeedSettings:
    """Test settings: no retries, no backoff, a sources file pointing at example hosts."""
    sources_file = tmp_path / "sources.yaml"
    sources_file.write_text(
        "sources:\n"
        "  courses:\n"
        f'    url: "{COURSE_URL}"\n'
        f'    origin: "{COURSE_ORIGIN}"\n'
        "  conferences:\n"
        f'    url: "{CONFERENCE_URL}"\n'
        f'    origin: "{CONFERENCE_ORIGIN}"\n'
        "    location_allow_list: [bangalore, bengaluru]\n",
        encoding="utf-8",
    )
    return FeedSettings(
        fetch_max_retries=0,
        fetch_retry_backoff_seconds=0,
        fetch_timeout_seconds=5,
        sources_path=str(sources_file),
    )


@pytest.fixture
def course_extractor() -> CourseExtractor:
    return CourseExtractor(COURSE_ORIGIN)


@pytest.fixture
def conference_extractor() -> ConferenceExtractor:
    return ConferenceExtractor(CONFERENCE_ORIGIN)


@pytest.fixture
def store() -> CacheStore:
    return CacheStore()


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def sample_courses() -> list[Course]:
    return [
        Course(title="Algebra for Teachers", url=f"{COURSE_ORIGIN}/learn/algebra"),
        Course(title="Geometry Basics", url=f"{COURSE_ORIGIN}/learn/geometry"),
        Course(title="Teaching Calculus", url=f"{COURSE_ORIGIN}/learn/calculus"),
    ]


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

sources = st.sampled_from(list(SourceName))

# Text safe to embed in markup without escaping
cell_text = st.text(
    alphabet=st.characters(categories=("L", "N"), include_characters=" -,"),
    min_size=1,
    max_size=30,
).filter(lambda s: s.strip() != "")

courses = st.builds(
    Course,
    title=cell_text,
    url=st.from_regex(r"https://[a-z]{3,10}\.org/learn/[a-z0-9]{1,10}", fullmatch=True),
)

conferences = st.builds(
    Conference,
    title=cell_text,
    date=cell_text,
    location=cell_text,
    link=st.from_regex(r"https://[a-z]{3,10}\.com/event/[0-9]{1,6}", fullmatch=True),
)

course_lists = st.lists(courses, min_size=1, max_size=10)
