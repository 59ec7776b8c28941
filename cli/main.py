"""Page summarizer CLI.

Usage:
    python cli/main.py --help

Commands:
    summarize  → run the full pipeline for one URL
    extract    → render and extract only, print the bounded text
    serve      → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from pagesum.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from pagesum.config import settings
from pagesum.errors import PipelineError
from pagesum.logging_config import setup_logging

app = typer.Typer(
    name="pagesum",
    help="Summarize web pages with a headless browser and an LLM.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL."),
) -> None:
    """Configure logging before any command runs."""
    if log_level:
        # The API lifespan reconfigures logging from settings, so the
        # override has to live there too.
        settings.log_level = log_level
    setup_logging()


@app.command("summarize")
def summarize(
    url: str = typer.Option(..., help="URL of the page to summarize."),
) -> None:
    """Render, extract and summarize a URL; print the summary."""
    from pagesum.summary.pipeline import summarize_url

    typer.echo(f"[summarize] Summarizing {url!r} …", err=True)
    result = summarize_url(url)
    typer.echo(result.message)
    if not result.ok:
        typer.echo(
            f"[summarize] Failed while {result.failed_stage.value}: {result.error}",
            err=True,
        )
        raise typer.Exit(1)


@app.command("extract")
def extract(
    url: str = typer.Option(..., help="URL of the page to extract."),
) -> None:
    """Render and extract a URL; print the bounded text without summarizing."""
    from pagesum.summary.pipeline import extract_url_text
    from pagesum.summary.preprocess import count_tokens

    typer.echo(f"[extract] Rendering {url!r} …", err=True)
    try:
        text = extract_url_text(url)
    except PipelineError as exc:
        typer.echo(f"[extract] {type(exc).__name__}: {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"[extract] Tokens : {count_tokens(text)}", err=True)
    typer.echo(text)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: HOST)."),
    port: Optional[int] = typer.Option(None, help="Bind port (default: PORT)."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "pagesum.api.app:app",
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    app()
