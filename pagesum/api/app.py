"""FastAPI application factory.

Routes
------
    POST /api   — summarize the page at ``{"url": ...}`` (plain-text reply)
    GET  /      — fixed plain-text reply, not wired to the pipeline
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pagesum.api.routers import summarize as summarize_router
from pagesum.config import settings
from pagesum.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup."""
    setup_logging()
    logger.info(
        "Page summarizer ready (model=%s, max renders=%d)",
        settings.summary_model,
        settings.max_concurrent_renders,
    )
    yield


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Page Summarizer API",
        description=(
            "Renders a web page to PDF in headless Chromium, extracts its "
            "text and returns a short LLM-written summary."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(summarize_router.router, tags=["summarize"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn pagesum.api.app:app --reload
app = create_app()
