"""Centralised logging configuration.

Call ``setup_logging()`` once at application startup (the API lifespan and
the CLI both do) to initialise all loggers.  After that, any module can
simply do::

    import logging
    logger = logging.getLogger(__name__)

The service writes no files, so there is a single console handler on stderr.
"""

from __future__ import annotations

import logging
import logging.config

from pagesum.config import settings


def _build_config(level: str) -> dict:
    """Build a ``logging.config.dictConfig``-compatible dictionary."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "pagesum": {
                "level": level,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    }


def setup_logging(level: str | None = None) -> None:
    """Apply the logging configuration.  Safe to call more than once."""
    resolved = (level or settings.log_level).upper()
    logging.config.dictConfig(_build_config(resolved))
    logging.getLogger(__name__).debug("Logging initialised at level %s", resolved)
