"""Headless Chromium renderer: URL in, two-page PDF out.

The browser is opened with a tablet-sized portrait viewport so responsive
sites lay out their main content and hide most navigation chrome.  The page
is then printed with fixed, deterministic settings (half scale on 11x17in
paper, thin margins, no backgrounds) and only the first two pages are kept,
which bounds the cost of arbitrarily long pages.

Every launch is a fresh browser, but the number of simultaneous browsers is
capped by a process-wide semaphore of ``settings.max_concurrent_renders``
slots.
"""

from __future__ import annotations

import logging
import threading

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from pagesum.config import settings
from pagesum.errors import RenderError
from pagesum.scraper.models import RenderedDocument

logger = logging.getLogger(__name__)

VIEWPORT = {"width": 820, "height": 1180}

_MARGIN = "0.1in"

# Chromium tolerates page numbers past the end of the document in
# ``page_ranges``, so "1-2" on a one-page print yields that single page.
PDF_OPTIONS = {
    "landscape": False,
    "display_header_footer": False,
    "print_background": False,
    "scale": 0.5,
    "width": "11in",
    "height": "17in",
    "margin": {"top": _MARGIN, "bottom": _MARGIN, "left": _MARGIN, "right": _MARGIN},
    "page_ranges": "1-2",
    "prefer_css_page_size": False,
}

_slots: threading.BoundedSemaphore | None = None
_slots_lock = threading.Lock()


def _render_slots() -> threading.BoundedSemaphore:
    """Return the shared admission semaphore, creating it on first use."""
    global _slots
    with _slots_lock:
        if _slots is None:
            _slots = threading.BoundedSemaphore(max(1, settings.max_concurrent_renders))
        return _slots


def _print_page(url: str) -> bytes:
    """Launch a browser, load *url* and return the printed PDF bytes."""
    with sync_playwright() as pw:
        browser = pw.chromium.launch(headless=True)
        try:
            page = browser.new_page(viewport=VIEWPORT)
            response = page.goto(
                url,
                timeout=int(settings.request_timeout * 1000),
                wait_until="load",
            )
            if response is not None and response.status >= 400:
                raise RenderError(f"HTTP {response.status} from {url}")
            return page.pdf(**PDF_OPTIONS)
        finally:
            browser.close()


def render_pdf(url: str) -> RenderedDocument:
    """Render *url* in headless Chromium and return the first two PDF pages.

    Blocks until a render slot is free, for at most
    ``settings.render_queue_timeout`` seconds.

    Raises:
        RenderError: If no slot frees up in time, the browser fails to start,
            navigation fails (DNS, TLS, timeout, HTTP error status) or
            printing fails.
    """
    slots = _render_slots()
    if not slots.acquire(timeout=settings.render_queue_timeout):
        raise RenderError("renderer busy: no free browser slot")

    try:
        logger.debug("Rendering %s", url)
        data = _print_page(url)
    except PlaywrightError as exc:
        raise RenderError(str(exc).splitlines()[0] if str(exc) else repr(exc)) from exc
    finally:
        slots.release()

    logger.debug("Rendered %s into %d PDF bytes", url, len(data))
    return RenderedDocument(url=url, data=data)
