"""FastAPI application for the stats cache proxy."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request

from statscache import __version__
from statscache.api.routes import router as api_router
from statscache.config import load_settings
from statscache.proxy.service import StatsProxy, create_proxy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan events."""
    # Startup
    if getattr(app.state, "proxy", None) is None:
        app.state.proxy = create_proxy(load_settings())
    proxy: StatsProxy = app.state.proxy
    logger.info(f"Proxying {proxy.upstream.url} (ttl {proxy.ttl_seconds:.0f}s)")
    yield
    # Shutdown
    logger.info("Shutting down stats cache proxy...")
    await proxy.close()


def create_app(proxy: StatsProxy | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        proxy: Pre-built proxy; when omitted one is created from settings
            at startup, which fails if BEARER_TOKEN is missing.
    """
    app = FastAPI(
        title="Stats Cache Proxy",
        description="Caching proxy for a fixed Plausible stats query",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.proxy = proxy

    # Request timing middleware
    @app.middleware("http")
    async def add_timing_header(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = (time.perf_counter() - start_time) * 1000
        response.headers["X-Process-Time-Ms"] = f"{process_time:.2f}"
        return response

    app.include_router(api_router)

    return app


# Create app instance
app = create_app()
