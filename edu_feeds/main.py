"""FastAPI application entry point with lifespan management.

Startup: load settings and source definitions, configure logging, build the
fetcher, extractor registry, source jobs, cache store and refresh scheduler,
publish them on app.state, run the boot refresh cycle, start the cron schedule.
Shutdown: stop the scheduler, close the HTTP client.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edu_feeds.config.settings import FeedSettings
from edu_feeds.config.sources import load_sources
from edu_feeds.extractors.registry import build_registry
from edu_feeds.integration.page_fetcher import PageFetcher
from edu_feeds.logging_config import configure_logging
from edu_feeds.middleware.error_handler import register_error_handlers
from edu_feeds.middleware.request_id import RequestIdMiddleware
from edu_feeds.routers.health import create_health_router
from edu_feeds.routers.records import create_records_router
from edu_feeds.services.cache_store import CacheStore
from edu_feeds.services.refresh_scheduler import RefreshScheduler
from edu_feeds.services.source_job import SourceJob

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    settings: FeedSettings = app.state.settings

    configure_logging(settings.log_level)
    logger.info("Starting feed service on port %d", settings.port)

    sources = load_sources(settings.sources_path)

    fetcher = PageFetcher(
        timeout_seconds=settings.fetch_timeout_seconds,
        user_agent=settings.user_agent,
        client=app.state.http_client,
    )

    registry = build_registry(sources)

    jobs = [
        SourceJob(
            url=sources[source].url,
            fetcher=fetcher,
            extractor=registry.get(source),
            max_retries=settings.fetch_max_retries,
            backoff_seconds=settings.fetch_retry_backoff_seconds,
        )
        for source in registry.list_sources()
    ]

    store = CacheStore(registry.list_sources())

    scheduler = RefreshScheduler(
        jobs=jobs,
        store=store,
        cron=settings.refresh_cron,
        timezone=settings.refresh_timezone,
    )

    # Routers read these from app.state. The server accepts requests only
    # after startup returns, so the boot cycle has finished by then unless
    # refresh_on_startup is off.
    app.state.store = store
    app.state.scheduler = scheduler

    if settings.refresh_on_startup:
        await scheduler.run_cycle()

    scheduler.start()
    logger.info("Feed service started successfully")

    yield

    # --- Shutdown ---
    logger.info("Shutting down feed service…")
    scheduler.shutdown()
    await fetcher.aclose()
    logger.info("Feed service shut down")


def create_app(
    settings: FeedSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings:
        Service settings; read from ``FEEDS_*`` environment variables when
        omitted.
    http_client:
        Optional client handed to the page fetcher instead of the one it
        would build itself.
    """
    settings = settings or FeedSettings()

    app = FastAPI(
        title="Edu Feeds Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.http_client = http_client

    register_error_handlers(app)

    app.include_router(create_health_router())
    app.include_router(create_records_router())

    # Starlette applies middleware in reverse order of add_middleware calls
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    return app


app = create_app()
