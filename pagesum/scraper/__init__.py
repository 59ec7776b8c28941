"""Scraper package: URL validation, headless rendering and PDF text extraction."""

from pagesum.scraper.extractor import extract_text, page_texts
from pagesum.scraper.models import RenderedDocument
from pagesum.scraper.renderer import render_pdf
from pagesum.scraper.validator import is_valid_url, validate_url

__all__ = [
    "validate_url",
    "is_valid_url",
    "render_pdf",
    "extract_text",
    "page_texts",
    "RenderedDocument",
]
