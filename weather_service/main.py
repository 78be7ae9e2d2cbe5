"""Weather Service - Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from weather_service import __version__
from weather_service.config import Settings, get_settings
from weather_service.context import AppContext, build_context
from weather_service.routers import weather_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Build the FastAPI app.

    When ``context`` is omitted it is built from environment settings at
    startup and torn down at shutdown. A caller-supplied context is used
    as-is and left for the caller to close.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        owned = context is None
        ctx = context or build_context(get_settings())
        app.state.context = ctx
        logger.info(f"Starting Weather Service v{__version__}")

        if owned:
            # Run initial collection before the first interval elapses
            if ctx.settings.run_on_startup:
                await ctx.job.tick()
            ctx.scheduler.start()

        yield

        # Shutdown
        if owned:
            await ctx.aclose()
        logger.info("Weather Service stopped")

    app = FastAPI(
        title="Weather Service",
        description="Periodic temperature collector with a latest-reading API",
        version=__version__,
        lifespan=lifespan,
        # /{city} is the only route
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    if context is not None:
        app.state.context = context

    app.include_router(weather_router, tags=["Weather"])
    return app
