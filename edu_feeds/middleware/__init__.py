"""Middleware package: error hierarchy and request ID."""

from edu_feeds.middleware.error_handler import (
    ExtractError,
    FeedError,
    FetchError,
    SourceNotFoundError,
    register_error_handlers,
)
from edu_feeds.middleware.request_id import RequestIdMiddleware, request_id_var

__all__ = [
    "ExtractError",
    "FeedError",
    "FetchError",
    "RequestIdMiddleware",
    "SourceNotFoundError",
    "register_error_handlers",
    "request_id_var",
]
