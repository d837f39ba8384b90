"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import get_settings
from .routes import operate_log, ppt

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info(f"Docmee client service starting (docmee: {settings.docmee_base_url})")
    if not settings.docmee_api_key:
        logger.warning("DOCMEE_API_KEY is not configured; token creation is disabled")

    yield

    logger.info("Docmee client service shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Docmee Client Service",
        description="Relays the Docmee PPT generation API and CRM operate logs",
        version="1.0.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(ppt.router, prefix="/api/ppt", tags=["ppt"])
    app.include_router(operate_log.router, prefix="/crm/operate-log", tags=["operate-log"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
