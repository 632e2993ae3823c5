"""CLI command for indexing local documents."""

from pathlib import Path
from typing import Annotated

import typer
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config.settings import get_settings
from src.cli.common import configure_logging, console, load_embedding_provider, open_store
from src.ingestion.indexer import index_file


def index(
    files: Annotated[
        list[Path],
        typer.Argument(help="Files to index (text, Markdown, code, HTML, PDF)"),
    ],
    chunk_size: Annotated[
        int | None,
        typer.Option("--chunk-size", help="Target chunk size in tokens"),
    ] = None,
    chunk_overlap: Annotated[
        int | None,
        typer.Option("--chunk-overlap", help="Overlap between chunks in tokens"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Index documents into the local vector store, replacing earlier versions."""
    configure_logging(verbose)

    settings = get_settings()
    chunk_size = chunk_size or settings.omnirecall_chunk_size
    chunk_overlap = settings.omnirecall_chunk_overlap if chunk_overlap is None else chunk_overlap

    embedding_provider = load_embedding_provider(settings)
    store = open_store(settings)

    console.print("[bold]OmniRecall Indexing[/bold]")
    console.print(f"Chunk size: {chunk_size} tokens, overlap: {chunk_overlap} tokens")
    console.print()

    table = Table(title="Indexing results")
    table.add_column("Document")
    table.add_column("Chunks", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Status")

    failures = 0
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Indexing documents...", total=len(files))
        for path in files:
            progress.update(task, description=f"Indexing {path.name}...")
            result = index_file(
                path,
                embedding_provider=embedding_provider,
                store=store,
                chunk_size=chunk_size,
                chunk_overlap=chunk_overlap,
            )
            if result.success:
                status = "[green]ok[/green]"
            else:
                failures += 1
                status = f"[red]{result.error}[/red]"
            table.add_row(path.name, str(result.chunks_created), str(result.chunks_failed), status)
            progress.advance(task)

    console.print(table)
    console.print(f"  Total in store: {store.count()} chunks")
    store.close()

    if failures:
        console.print(f"[yellow]{failures} document(s) were not indexed; retry later.[/yellow]")
