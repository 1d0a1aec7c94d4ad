"""API routes for the stats cache proxy."""

import logging

from fastapi import APIRouter, Request, Response

from statscache import __version__
from statscache.proxy.service import StatsProxy

logger = logging.getLogger(__name__)
router = APIRouter()


def get_proxy(request: Request) -> StatsProxy:
    """Get the process-wide proxy created by the app lifespan."""
    return request.app.state.proxy


@router.get("/")
async def cached_stats(request: Request) -> Response:
    """Return the upstream stats body, from cache when fresh."""
    result = await get_proxy(request).handle()

    headers = {"Content-Type": result.content_type}
    if result.cache_status:
        headers["X-Cache"] = result.cache_status

    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=headers,
    )


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Liveness probe; never contacts the upstream."""
    return {
        "status": "healthy",
        "version": __version__,
        "cached": get_proxy(request).slot.peek() is not None,
    }
