"""Health, readiness, and metrics endpoints.

- GET /health: liveness, always ``{"status": "ok"}`` while the process is up
- GET /readiness: 200 only once the first refresh cycle has completed
- GET /metrics: scheduler counters and per-source refresh diagnostics

The scheduler and cache store are read from ``app.state`` on every request,
so the router can be mounted before the lifespan builds them.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, Response


def create_health_router() -> APIRouter:
    """Factory that creates the health router."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        """Liveness probe."""
        return {"status": "ok"}

    @health_router.get("/readiness")
    async def readiness(request: Request, response: Response) -> dict:
        """Readiness probe, 200 iff at least one refresh cycle has completed."""
        scheduler = getattr(request.app.state, "scheduler", None)
        is_ready = bool(scheduler and scheduler.has_completed_cycle)
        if not is_ready:
            response.status_code = 503

        return {
            "ready": is_ready,
            "state": scheduler.state.value if scheduler else None,
        }

    @health_router.get("/metrics")
    async def metrics(request: Request) -> dict:
        """Operational metrics endpoint."""
        scheduler = getattr(request.app.state, "scheduler", None)
        store = getattr(request.app.state, "store", None)
        return {
            "scheduler": scheduler.get_stats() if scheduler else {},
            "sources": store.get_stats() if store else {},
        }

    return health_router
