"""Edu feeds: scheduled course and conference scraping behind a cached read API."""

__version__ = "1.0.0"
