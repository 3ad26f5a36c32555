from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from .client import DigiSignClient
from .config import Settings
from .exceptions import DigiSignError
from .service import EnvelopeDownloadService

app = typer.Typer(no_args_is_help=True, add_completion=False)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _client() -> DigiSignClient:
    try:
        settings = Settings()
    except Exception as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)
    return DigiSignClient(settings)


@app.command()
def envelopes(
        status: Optional[str] = typer.Option(None, help="Envelope status filter (e.g., draft, sent, completed)"),
        page: int = typer.Option(1, min=1, help="Page number"),
        limit: int = typer.Option(30, min=1, max=500, help="Items per page"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """List one page of envelopes as JSON."""
    setup_logging(verbose)
    query = {"page": page, "itemsPerPage": limit, "status[eq]": status}
    with _client() as client:
        try:
            listing = client.envelopes().list(query)
        except DigiSignError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)
        summary = {
            "total": listing.total,
            "page": listing.page,
            "limit": listing.limit,
            "items": [
                {"id": env.id, "status": env.status, "email_subject": env.email_subject}
                for env in listing
            ],
        }
    typer.echo(json.dumps(summary, indent=2))


@app.command()
def download(
        envelope_id: str = typer.Argument(..., help="Envelope id"),
        out: Path = typer.Option(Path("./out"), help="Output directory"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Download every document of an envelope to the filesystem."""
    setup_logging(verbose)
    with _client() as client:
        try:
            result = EnvelopeDownloadService(client).download(envelope_id, out)
        except DigiSignError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)

    summary = {
        "status": result.status,
        "out_dir": str(result.out_dir),
        "downloaded": len(result.downloaded_files),
        "failures": len(result.failures),
        "started_at": result.started_at.isoformat(),
        "finished_at": result.finished_at.isoformat(),
    }
    typer.echo(json.dumps(summary, indent=2))

    if result.failures:
        typer.echo("\nFailures:", err=True)
        for f in result.failures[:50]:
            typer.echo(f"- {f}", err=True)
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    sys.exit(main())
