"""Exception taxonomy for the summarization pipeline.

Every stage raises a subclass of :class:`PipelineError`.  The orchestrator
catches them at the stage boundary and keeps them on the
:class:`~pagesum.summary.pipeline.PipelineResult`; only the outermost
response formatting reduces them to a fixed user-facing string.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for all stage failures."""


class InvalidUrlError(PipelineError):
    """The input is not an absolute URL with a scheme and a host."""


class RenderError(PipelineError):
    """The headless browser could not produce a PDF of the page."""


class ExtractError(PipelineError):
    """Text could not be extracted from the rendered PDF."""


class LibraryUnavailableError(ExtractError):
    """The PDF library could not be loaded."""


class PageTextError(ExtractError):
    """A single page failed to yield its text layer."""

    def __init__(self, page_number: int, cause: str) -> None:
        self.page_number = page_number
        self.cause = cause
        super().__init__(f"page {page_number}: {cause}")


class SummarizationError(PipelineError):
    """The chat-completion call failed or returned nothing usable."""
