"""Cardex command line: CSV import and the API server."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from cardex.csv_utils import CsvFormatError, count_rows

from . import config
from .database import dispose_engine, init_db
from .importer import CardImporter, format_bytes

console = Console()

app = typer.Typer(
    name="cardex",
    help="Cardex - trading card catalogue tools.",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Load ``.env`` and configure logging before any command."""
    load_dotenv()
    config.configure_logging()


@app.command("import-cards")
def import_cards(
    file: Annotated[
        Optional[Path], typer.Option("--file", "-f", help="CSV file to import")
    ] = None,
    limit: Annotated[
        Optional[int], typer.Option("--limit", "-l", min=0, help="Stop after N rows (0 for no limit)")
    ] = None,
    batch_size: Annotated[
        Optional[int], typer.Option("--batch-size", min=1, help="Rows per commit")
    ] = None,
) -> None:
    """Import cards from a CSV export, skipping uuids already stored."""
    path = file or Path(config.cards_csv_path())
    try:
        total = count_rows(path)
    except OSError as exc:
        console.print(f"[red]Cannot open {escape(str(path))}: {escape(str(exc))}[/]", soft_wrap=True)
        raise typer.Exit(code=1)
    limit = limit or None
    if limit is not None:
        total = min(total, limit)

    init_db()
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]Importing cards"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Importing", total=total)

        def on_progress(event: str, payload: dict) -> None:
            if event == "row":
                progress.update(task, advance=1)

        importer = CardImporter(batch_size=batch_size, progress=on_progress)
        try:
            summary = importer.run(path, limit=limit)
        except CsvFormatError as exc:
            console.print(f"[red]{escape(str(exc))}[/]", soft_wrap=True)
            raise typer.Exit(code=1)
        except OSError as exc:
            console.print(f"[red]Cannot open {escape(str(path))}: {escape(str(exc))}[/]", soft_wrap=True)
            raise typer.Exit(code=1)
        finally:
            dispose_engine()

    console.print(
        f"Processed {summary.processed} cards in {summary.elapsed_seconds:.2f} seconds "
        f"(Imported: {summary.imported}, Skipped: {summary.skipped}, "
        f"Artists created: {summary.artists_created}, "
        f"Memory peak: {format_bytes(summary.memory_peak_bytes)})",
        soft_wrap=True,
    )


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Interface to bind")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port to listen on")] = 8000,
) -> None:
    """Start the HTTP API."""
    import uvicorn

    uvicorn.run("server:app", host=host, port=port)
