"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderedDocument:
    """A paginated PDF snapshot of a rendered web page."""

    url: str
    data: bytes

    def __len__(self) -> int:
        return len(self.data)
