"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crossroute.config import Settings, get_settings
from crossroute.core.context import SdkContext
from crossroute.web.controllers import health_router, quotes_router
from crossroute.web.services.quote_service import QuoteService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, ctx: Optional[SdkContext] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Without `ctx` one SDK session is opened at startup and closed at
    shutdown; a given `ctx` stays owned by the caller.
    """
    settings = settings or (ctx.settings if ctx else get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if not hasattr(app.state, "quote_service"):
            owned = SdkContext.create(settings)
            app.state.quote_service = QuoteService(owned)
            logger.info("SDK session opened")
        yield
        if owned is not None:
            await owned.aclose()
            logger.info("SDK session closed")

    app = FastAPI(
        title="Crossroute API",
        description="Cross-chain swap quote API",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if ctx is not None:
        app.state.quote_service = QuoteService(ctx)

    app.include_router(health_router, tags=["Health"])
    app.include_router(quotes_router)

    return app
