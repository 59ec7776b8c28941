"""Centralised settings for the page summarizer.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

The LLM credential is not a setting: it is read from the
environment on every call (see :mod:`pagesum.summary.client`) so a missing
key fails only the request that needs it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Chat-completion provider
    # ------------------------------------------------------------------
    openai_base_url: str = field(
        default_factory=lambda: os.environ.get(
            "OPENAI_BASE_URL", "https://api.openai.com/v1"
        ).rstrip("/")
    )
    summary_model: str = field(
        default_factory=lambda: os.environ.get("SUMMARY_MODEL", "gpt-3.5-turbo")
    )
    summary_max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("SUMMARY_MAX_TOKENS", "512"))
    )
    llm_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LLM_TIMEOUT", "60.0"))
    )

    # ------------------------------------------------------------------
    # Text preprocessing
    # ------------------------------------------------------------------
    max_input_tokens: int = field(
        default_factory=lambda: int(os.environ.get("MAX_INPUT_TOKENS", "3000"))
    )

    # ------------------------------------------------------------------
    # Renderer
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    max_concurrent_renders: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONCURRENT_RENDERS", "4"))
    )
    render_queue_timeout: float = field(
        default_factory=lambda: float(os.environ.get("RENDER_QUEUE_TIMEOUT", "60.0"))
    )

    # ------------------------------------------------------------------
    # Extractor
    # ------------------------------------------------------------------
    skip_unreadable_pages: bool = field(
        default_factory=lambda: _env_flag("SKIP_UNREADABLE_PAGES")
    )

    # ------------------------------------------------------------------
    # HTTP server / logging
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "4000")))
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )


# Module-level singleton; import this everywhere:
#   from pagesum.config import settings
settings = Settings()
