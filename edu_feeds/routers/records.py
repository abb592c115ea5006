"""Record endpoints.

- GET /courses: current cached Course records (may be empty)
- GET /conferences: current cached Conference records (may be empty)

Both return the full cache snapshot of ``app.state.store`` as a bare JSON
array and never wait on a refresh in progress. Before the lifespan has
built a store they return ``[]``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from edu_feeds.models.records import SourceName

logger = logging.getLogger(__name__)


def create_records_router() -> APIRouter:
    """Factory that creates the records router."""

    records_router = APIRouter(tags=["records"])

    def _snapshot(request: Request, source: SourceName) -> list[dict]:
        store = getattr(request.app.state, "store", None)
        records = store.get(source) if store is not None else ()
        logger.debug(
            "%s requested, sending %d %s",
            source.value.capitalize(),
            len(records),
            source.value,
            extra={"source": source.value, "record_count": len(records)},
        )
        return [record.model_dump() for record in records]

    @records_router.get("/courses")
    async def list_courses(request: Request) -> list[dict]:
        """List the current Course records."""
        return _snapshot(request, SourceName.COURSES)

    @records_router.get("/conferences")
    async def list_conferences(request: Request) -> list[dict]:
        """List the current Conference records."""
        return _snapshot(request, SourceName.CONFERENCES)

    return records_router
