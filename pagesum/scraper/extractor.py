"""PDF text extraction: turns a :class:`RenderedDocument` into plain text.

``pypdf`` is imported lazily so a missing install surfaces as
:class:`~pagesum.errors.LibraryUnavailableError` at extraction time rather
than breaking the import of the whole package.  ``pypdf`` is pure Python, so
there is no native library path to configure and no system-wide fallback to
bind; the import is the only binding step.  A fresh ``PdfReader`` is built
for every document, so concurrent requests share nothing.
"""

from __future__ import annotations

import io
import logging
from typing import List

from pagesum.config import settings
from pagesum.errors import ExtractError, LibraryUnavailableError, PageTextError
from pagesum.scraper.models import RenderedDocument

logger = logging.getLogger(__name__)


def _load_pypdf():
    try:
        import pypdf  # noqa: PLC0415
    except ImportError as exc:
        raise LibraryUnavailableError(f"pypdf is not available: {exc}") from exc
    return pypdf


def page_texts(document: RenderedDocument) -> List[str]:
    """Return the text of every page of *document*, in page order.

    By default a page that fails to produce text aborts the extraction with
    :class:`PageTextError`.  With ``settings.skip_unreadable_pages`` enabled
    the page is logged and skipped instead.

    Raises:
        LibraryUnavailableError: If ``pypdf`` cannot be imported.
        ExtractError: If the bytes are not a readable PDF.
        PageTextError: If a page fails and skipping is disabled.
    """
    pypdf = _load_pypdf()

    try:
        reader = pypdf.PdfReader(io.BytesIO(document.data))
        pages = list(reader.pages)
    except (pypdf.errors.PyPdfError, ValueError, KeyError, OSError) as exc:
        raise ExtractError(f"unreadable PDF for {document.url}: {exc}") from exc

    texts: List[str] = []
    for number, page in enumerate(pages, start=1):
        try:
            text = page.extract_text()
        except Exception as exc:  # pypdf raises a wide range of types here
            if not settings.skip_unreadable_pages:
                raise PageTextError(number, str(exc) or type(exc).__name__) from exc
            logger.warning(
                "Skipping page %d of %s: %s", number, document.url, exc
            )
            continue
        texts.append(text or "")

    return texts


def extract_text(document: RenderedDocument) -> str:
    """Return the text of all pages of *document* joined by single spaces."""
    return " ".join(page_texts(document))
