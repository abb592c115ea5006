"""Global error hierarchy and FastAPI exception handlers.

All feed-specific errors extend FeedError. Fetch and extract failures are
absorbed at the SourceJob boundary; the FastAPI handlers only catch errors
that escape a route (plus unhandled exceptions) and return a consistent
JSON body: { error, meta }.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class FeedError(Exception):
    """Base error for all feed-specific errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class FetchError(FeedError):
    """Upstream page could not be retrieved (transport failure or non-2xx)."""

    status_code = 502
    message = "Upstream page could not be fetched"


class ExtractError(FeedError):
    """Upstream markup could not be loaded into a traversable document."""

    status_code = 502
    message = "Upstream page could not be parsed"


class SourceNotFoundError(FeedError):
    """No extractor or cache entry exists for the requested source."""

    status_code = 404
    message = "Source not found"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def _error_response(
    status_code: int,
    error: str,
    meta: dict | None = None,
) -> JSONResponse:
    """Build a JSON error response."""
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "meta": meta},
    )


async def _feed_error_handler(_request: Request, exc: FeedError) -> JSONResponse:
    """Handle FeedError subclasses."""
    meta = exc.details if exc.details else None
    return _error_response(exc.status_code, exc.message, meta=meta)


async def _unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log traceback, return generic 500."""
    logger.error(
        "Unhandled exception: %s\n%s",
        exc,
        traceback.format_exc(),
    )
    return _error_response(status_code=500, error="Internal server error")


# ---------------------------------------------------------------------------
# Registration helper
# ---------------------------------------------------------------------------


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(FeedError, _feed_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]
