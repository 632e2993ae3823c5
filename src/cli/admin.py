"""CLI commands for index statistics and maintenance."""

from typing import Annotated

import typer
from rich.table import Table

from config.settings import get_settings
from src.cli.common import console
from src.exceptions import DatabaseError
from src.vectorstore.admin import clear_index, get_index_stats
from src.vectorstore.sqlite_store import SQLiteVectorStore


def stats(
    documents: Annotated[
        bool,
        typer.Option("--documents", "-d", help="List indexed documents"),
    ] = False,
):
    """Show how many chunks are indexed."""
    settings = get_settings()
    index_stats = get_index_stats(settings.db_path)

    console.print(f"[bold]Index:[/bold] {settings.db_path}")
    console.print(f"  Chunks: {index_stats.chunk_count}")
    console.print(f"  Indexed: {'yes' if index_stats.indexed else 'no'}")

    if documents and index_stats.indexed:
        with SQLiteVectorStore(str(settings.db_path)) as store:
            summaries = store.list_documents()

        table = Table(title="Indexed documents")
        table.add_column("Document")
        table.add_column("Chunks", justify="right")
        table.add_column("ID")
        for summary in summaries:
            table.add_row(summary.document_name, str(summary.chunk_count), summary.document_id)
        console.print(table)


def clear(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation"),
    ] = False,
):
    """Delete the entire index."""
    settings = get_settings()

    if not yes:
        typer.confirm(f"Delete the index at {settings.db_path}?", abort=True)

    try:
        removed = clear_index(settings.db_path)
    except DatabaseError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1)

    if removed:
        console.print("[bold green]Index cleared.[/bold green]")
    else:
        console.print("No index to clear.")
