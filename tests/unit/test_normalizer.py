"""Unit tests for text and link normalization helpers."""

from edu_feeds.models.normalizer import (
    absolutize_link,
    matches_location,
    normalize_whitespace,
)


class TestNormalizeWhitespace:
    def test_collapses_spaces(self):
        assert normalize_whitespace("hello   world") == "hello world"

    def test_collapses_newlines(self):
        assert normalize_whitespace("Intro   to\nMath") == "Intro to Math"

    def test_trims(self):
        assert normalize_whitespace("  hello  ") == "hello"

    def test_mixed_whitespace(self):
        assert normalize_whitespace(" \t hello \n world \t ") == "hello world"

    def test_empty(self):
        assert normalize_whitespace("") == ""
        assert normalize_whitespace(" \n\t ") == ""


class TestAbsolutizeLink:
    def test_root_relative_href(self):
        assert (
            absolutize_link("https://www.coursera.org", "/learn/algebra")
            == "https://www.coursera.org/learn/algebra"
        )

    def test_missing_href_yields_origin(self):
        assert absolutize_link("https://www.coursera.org", None) == "https://www.coursera.org"

    def test_empty_href_yields_origin(self):
        assert absolutize_link("https://www.coursera.org", "   ") == "https://www.coursera.org"

    def test_relative_href_without_slash(self):
        assert absolutize_link("https://x.org", "event/5") == "https://x.org/event/5"

    def test_trailing_slash_on_origin(self):
        assert absolutize_link("https://x.org/", "/a") == "https://x.org/a"

    def test_absolute_href_kept(self):
        assert absolutize_link("https://x.org", "https://y.org/a") == "https://y.org/a"

    def test_scheme_relative_href_takes_origin_scheme(self):
        assert absolutize_link("https://x.org", "//cdn.y.org/a") == "https://cdn.y.org/a"
        assert absolutize_link("http://x.org/", "//cdn.y.org/a") == "http://cdn.y.org/a"

    def test_query_only_href(self):
        assert absolutize_link("https://x.org", "?page=2") == "https://x.org?page=2"


class TestMatchesLocation:
    def test_substring_match(self):
        assert matches_location("Bengaluru, Karnataka", ["bangalore", "bengaluru"])

    def test_case_insensitive(self):
        assert matches_location("BANGALORE", ["bangalore"])
        assert matches_location("bangalore", ["BANGALORE"])

    def test_no_match(self):
        assert not matches_location("Mumbai", ["bangalore", "bengaluru"])

    def test_empty_location(self):
        assert not matches_location("", ["bangalore"])

    def test_empty_allow_list(self):
        assert not matches_location("Bangalore", [])
