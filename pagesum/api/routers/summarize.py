"""Summarization endpoints.

Routes
------
POST /api    Body: {"url": "https://..."}    → summarize_url
GET  /       Query: ?url=...                 → fixed message

Both always answer ``200 OK`` with a plain-text body; failures are reported
through the body text only.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from pagesum.summary.pipeline import summarize_url

logger = logging.getLogger(__name__)

router = APIRouter()

INDEX_MESSAGE = "not able to parse url"


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class SummarizeRequest(BaseModel):
    url: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/api", response_class=PlainTextResponse)
def summarize_endpoint(body: SummarizeRequest) -> str:
    """Summarize the page at ``body.url``.

    Runs synchronously in FastAPI's worker thread pool, so concurrent
    requests each get their own pipeline run.
    """
    logger.info("Received url: %r", body.url)
    return summarize_url(body.url).message


@router.get("/", response_class=PlainTextResponse)
def index(url: Optional[str] = None) -> str:
    """Fixed reply; the ``url`` query parameter is accepted but unused."""
    logger.debug("GET / (url=%r)", url)
    return INDEX_MESSAGE
