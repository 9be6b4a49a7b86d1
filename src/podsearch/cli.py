"""Command line interface for podsearch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from podsearch.config import AppConfig
from podsearch.errors import CorpusLoadError
from podsearch.index.search import Searcher
from podsearch.ingestion.transcript_loader import load_transcripts
from podsearch.tools import suggest_identities


console = Console()
app = typer.Typer(help="podsearch - keyword search over podcast transcripts")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_searcher(config: AppConfig) -> Searcher:
    transcripts_dir = config.resolve_transcripts_dir(Path.cwd())
    searcher = Searcher(**config.searcher_options())
    try:
        searcher.initialize(load_transcripts(transcripts_dir))
    except CorpusLoadError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(code=1) from exc
    return searcher


@app.command()
def search(
    query: str = typer.Argument(..., help="Keywords to look for"),
    transcripts_dir: Path = typer.Option(None, "--dir", help="Directory of .txt transcripts"),
    limit: Optional[int] = typer.Option(None, help="Number of results to display (default: 10)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search transcripts by keyword."""
    _setup_logging(verbose)
    searcher = _load_searcher(AppConfig.from_options(transcripts_dir))

    results = searcher.search(query, limit)
    if not results:
        console.print(f'[yellow]No results found for "{query}".[/yellow]')
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Rank")
    table.add_column("Guest")
    table.add_column("Time")
    table.add_column("Snippet")

    for result in results:
        snippet = result.snippet.replace("\n", " ")
        table.add_row(str(result.rank), result.identity, result.timestamp or "", snippet[:240])

    console.print(table)


@app.command()
def episode(
    guest: str = typer.Argument(..., help="Guest name, full or partial"),
    transcripts_dir: Path = typer.Option(None, "--dir", help="Directory of .txt transcripts"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the full transcript for a guest."""
    _setup_logging(verbose)
    searcher = _load_searcher(AppConfig.from_options(transcripts_dir))

    document = searcher.get_document(guest)
    if document is None:
        console.print(f'[yellow]Episode with guest "{guest}" not found.[/yellow]')
        suggestions = suggest_identities(guest, searcher.list_identities())
        if suggestions:
            console.print(f"Did you mean: {', '.join(suggestions)}?")
        raise typer.Exit(code=1)

    console.print(f"[bold]# Episode: {document.identity}[/bold]\n")
    console.print(document.text, markup=False, highlight=False)


@app.command(name="list")
def list_episodes(
    transcripts_dir: Path = typer.Option(None, "--dir", help="Directory of .txt transcripts"),
) -> None:
    """List every available guest."""
    searcher = _load_searcher(AppConfig.from_options(transcripts_dir))
    identities = searcher.list_identities()
    console.print(f"Available episodes ({len(identities)} total)")
    for identity in identities:
        console.print(identity, markup=False, highlight=False)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(3000, help="Server port"),
    transcripts_dir: Path = typer.Option(None, "--dir", help="Directory of .txt transcripts"),
) -> None:
    """Start the HTTP server."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from podsearch.web.app import create_app

    config = AppConfig.from_options(transcripts_dir)
    searcher = _load_searcher(config)

    console.print(
        f"Starting server on http://{host}:{port} ({searcher.document_count} episodes)"
    )
    uvicorn.run(
        create_app(searcher, config),
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
