"""CLI commands for semantic search and context preview."""

from typing import Annotated

import typer
from rich.table import Table

from config.settings import get_settings
from src.cli.common import configure_logging, console, load_embedding_provider, open_store
from src.exceptions import EmbeddingError
from src.retrieval.context import retrieve_context, semantic_search


def search(
    query: Annotated[str, typer.Argument(help="Natural language search query")],
    top_k: Annotated[
        int,
        typer.Option("--top-k", "-k", help="Number of results"),
    ] = 5,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Show the indexed chunks most similar to a query."""
    configure_logging(verbose)

    settings = get_settings()
    embedding_provider = load_embedding_provider(settings)
    store = open_store(settings)

    try:
        results = semantic_search(query, embedding_provider, store, top_k=top_k)
    except EmbeddingError as e:
        console.print(f"[bold red]Could not embed query: {e}[/bold red]")
        raise typer.Exit(1)
    finally:
        store.close()

    if not results:
        console.print("[yellow]No indexed documents. Run 'omnirecall index FILE...' first.[/yellow]")
        return

    table = Table(title=f"Results for: {query}")
    table.add_column("#", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Document")
    table.add_column("Chunk", justify="right")
    table.add_column("Content")

    for rank, result in enumerate(results, start=1):
        preview = result.chunk.content.replace("\n", " ")
        if len(preview) > 120:
            preview = preview[:117] + "..."
        table.add_row(
            str(rank),
            f"{result.score:.3f}",
            result.chunk.document_name,
            str(result.chunk.chunk_index),
            preview,
        )

    console.print(table)


def context(
    query: Annotated[str, typer.Argument(help="Natural language query")],
    max_tokens: Annotated[
        int | None,
        typer.Option("--max-tokens", help="Token budget for the assembled context"),
    ] = None,
    search_k: Annotated[
        int | None,
        typer.Option("--search-k", help="Number of candidates to consider"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Print the grounding context that would be sent to the chat model."""
    configure_logging(verbose)

    settings = get_settings()
    embedding_provider = load_embedding_provider(settings)
    store = open_store(settings)

    try:
        text = retrieve_context(
            query,
            embedding_provider,
            store,
            max_tokens=max_tokens or settings.omnirecall_context_max_tokens,
            search_k=search_k or settings.omnirecall_search_k,
            min_score=settings.omnirecall_min_relevance,
            min_results=settings.omnirecall_min_context_results,
        )
    except EmbeddingError as e:
        console.print(f"[bold red]Could not embed query: {e}[/bold red]")
        raise typer.Exit(1)
    finally:
        store.close()

    if not text:
        console.print("[yellow]No grounding context available for this query.[/yellow]")
        return

    console.print(text, markup=False, highlight=False)
