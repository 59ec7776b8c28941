"""URL-to-summary pipeline.

``summarize_url`` sequences the stages::

    validate → render → extract → bound → summarize

Each stage runs to completion before the next starts.  A failure at any
stage ends the run in ``Stage.FAILED``; nothing is retried and no partial
output is returned.  The rich error stays on the :class:`PipelineResult`
(and in the log); only :attr:`PipelineResult.message` reduces it to one of
the fixed strings shown to callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pagesum.config import settings
from pagesum.errors import (
    ExtractError,
    InvalidUrlError,
    PipelineError,
    RenderError,
    SummarizationError,
)
from pagesum.scraper.extractor import extract_text
from pagesum.scraper.renderer import render_pdf
from pagesum.scraper.validator import validate_url
from pagesum.summary.client import summarize_text
from pagesum.summary.preprocess import bound_text

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "parse target url failure"
NO_TEXT_MESSAGE = "failed to get text from webpage"
NO_SUMMARY_MESSAGE = "failed to create summary"


class Stage(str, Enum):
    VALIDATING = "validating"
    RENDERING = "rendering"
    EXTRACTING = "extracting"
    SUMMARIZING = "summarizing"
    DONE = "done"
    FAILED = "failed"


_FAILURE_MESSAGES = {
    Stage.VALIDATING: INVALID_URL_MESSAGE,
    Stage.RENDERING: NO_TEXT_MESSAGE,
    Stage.EXTRACTING: NO_TEXT_MESSAGE,
    Stage.SUMMARIZING: NO_SUMMARY_MESSAGE,
}


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one pipeline run."""

    url: str
    stage: Stage
    summary: Optional[str] = None
    failed_stage: Optional[Stage] = None
    error: Optional[PipelineError] = None

    @property
    def ok(self) -> bool:
        return self.stage is Stage.DONE

    @property
    def message(self) -> str:
        """The caller-facing text: the summary, or a fixed failure string."""
        if self.ok:
            return self.summary or ""
        return _FAILURE_MESSAGES[self.failed_stage]


def _failed(url: str, stage: Stage, error: PipelineError) -> PipelineResult:
    logger.warning(
        "Pipeline failed stage=%s url=%r error=%s cause=%s",
        stage.value,
        url,
        type(error).__name__,
        error,
    )
    return PipelineResult(url=url, stage=Stage.FAILED, failed_stage=stage, error=error)


def extract_url_text(url: str) -> str:
    """Validate, render and extract *url*, returning the bounded text.

    Raises:
        InvalidUrlError, RenderError, ExtractError: From the failing stage.
    """
    target = validate_url(url)
    document = render_pdf(target)
    return bound_text(extract_text(document), settings.max_input_tokens)


def summarize_url(url: str) -> PipelineResult:
    """Run the full pipeline for *url* and return its :class:`PipelineResult`.

    Never raises for stage failures; they are reported on the result.
    """
    logger.info("Summarizing %r", url)

    try:
        target = validate_url(url)
    except InvalidUrlError as exc:
        return _failed(url, Stage.VALIDATING, exc)

    try:
        document = render_pdf(target)
    except RenderError as exc:
        return _failed(url, Stage.RENDERING, exc)

    try:
        raw_text = extract_text(document)
    except ExtractError as exc:
        return _failed(url, Stage.EXTRACTING, exc)

    bounded = bound_text(raw_text, settings.max_input_tokens)
    logger.debug("Bounded text for %s to %d chars", target, len(bounded))

    summary = summarize_text(bounded)
    if summary is None:
        return _failed(
            url, Stage.SUMMARIZING, SummarizationError("no summary produced")
        )

    logger.info("Summarized %r (%d chars)", url, len(summary))
    return PipelineResult(url=url, stage=Stage.DONE, summary=summary)
