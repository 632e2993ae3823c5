"""Helpers shared by CLI commands."""

import logging

import typer
from rich.console import Console

from config.settings import Settings
from src.embedding.config import get_embedding_provider
from src.embedding.provider import EmbeddingProvider
from src.exceptions import ConfigurationError, DatabaseError
from src.vectorstore.sqlite_store import SQLiteVectorStore

console = Console()


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.WARNING)


def open_store(settings: Settings) -> SQLiteVectorStore:
    """Open the configured vector store or exit with a readable error."""
    try:
        return SQLiteVectorStore(path=str(settings.db_path))
    except DatabaseError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1)


def load_embedding_provider(settings: Settings) -> EmbeddingProvider:
    """Build the configured embedding provider or exit with a hint."""
    try:
        return get_embedding_provider(settings)
    except ConfigurationError as e:
        console.print(
            f"[bold red]{e}[/bold red]\n"
            "Set OMNIRECALL_EMBEDDING_PROVIDER and the matching API key, "
            "e.g. export GEMINI_API_KEY='...'"
        )
        raise typer.Exit(1)
