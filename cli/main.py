"""Accessibility gateway CLI.

Usage:
    python cli/main.py --help

Commands:
    transform → fetch a page and write the rewritten HTML
    summary   → print a three-bullet summary as JSON
    serve     → run the HTTP API under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from gateway.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from gateway.config import configure_logging

app = typer.Typer(
    name="gateway",
    help="Accessibility gateway CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging("DEBUG" if verbose else None)


@app.command("transform")
def transform(
    url: str = typer.Option(..., help="Page to fetch."),
    mode: str = typer.Option(
        "simplified", help="Mode: original | simplified | translated | dyslexia."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write HTML here instead of stdout."
    ),
) -> None:
    """Fetch a page, rewrite it for MODE, and emit the resulting HTML."""
    from gateway.llm.client import CompletionClient
    from gateway.pipeline.transform import parse_transform_request, transform_page
    from gateway.scraper.errors import InvalidRequestError

    try:
        request = parse_transform_request(url, mode)
    except InvalidRequestError as exc:
        typer.echo(f"[transform] {exc}", err=True)
        raise typer.Exit(2)

    typer.echo(f"[transform] {request.target_url!r} (mode={request.mode.value}) …", err=True)
    html = transform_page(request, CompletionClient())

    if output is None:
        typer.echo(html)
        return
    output.write_text(html, encoding="utf-8")
    typer.echo(f"[transform] Wrote {len(html)} chars to {output}", err=True)


@app.command("summary")
def summary(
    url: str = typer.Option(..., help="Page to summarize."),
) -> None:
    """Print a three-bullet summary and reading time as JSON."""
    from gateway.llm.client import CompletionClient
    from gateway.pipeline.summary import summarize_page
    from gateway.scraper.errors import InvalidUrlError
    from gateway.scraper.fetcher import validate_url

    try:
        target_url = validate_url(url)
    except InvalidUrlError as exc:
        typer.echo(f"[summary] {exc}", err=True)
        raise typer.Exit(2)

    result = summarize_page(target_url, CompletionClient())
    typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Restart on code changes."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("gateway.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
