"""CLI command for asking questions grounded in indexed documents."""

import logging
from typing import Annotated

import typer
from rich.panel import Panel
from rich.text import Text

from config.settings import get_settings
from src.cli.common import configure_logging, console, load_embedding_provider, open_store
from src.exceptions import ConfigurationError, EmbeddingError
from src.llm.answer import answer_question
from src.llm.config import get_llm
from src.retrieval.context import retrieve_context

logger = logging.getLogger(__name__)


def ask(
    question: Annotated[
        str,
        typer.Argument(help="Your question about the indexed documents"),
    ],
    show_context: Annotated[
        bool,
        typer.Option("--show-context", help="Print the retrieved context before the answer"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Ask a question; relevant document chunks are prepended as context."""
    configure_logging(verbose)

    settings = get_settings()

    if not settings.anthropic_api_key and settings.omnirecall_llm_provider == "anthropic":
        console.print(
            "[bold red]ANTHROPIC_API_KEY not set.[/bold red]\n"
            "Export your API key: export ANTHROPIC_API_KEY='sk-ant-...'"
        )
        raise typer.Exit(1)

    embedding_provider = load_embedding_provider(settings)
    store = open_store(settings)

    try:
        grounding = retrieve_context(
            question,
            embedding_provider,
            store,
            max_tokens=settings.omnirecall_context_max_tokens,
            search_k=settings.omnirecall_search_k,
            min_score=settings.omnirecall_min_relevance,
            min_results=settings.omnirecall_min_context_results,
        )
    except EmbeddingError as e:
        console.print(f"[bold red]Could not embed question: {e}[/bold red]")
        raise typer.Exit(1)
    finally:
        store.close()

    if show_context and grounding:
        console.print(Panel(Text(grounding), title="Context", border_style="dim"))

    try:
        llm = get_llm(settings)
    except ConfigurationError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1)

    with console.status("[bold green]Thinking..."):
        answer = answer_question(question, grounding, llm)

    header = Text()
    header.append("OmniRecall", style="bold")
    if grounding:
        header.append("  grounded in your documents", style="dim")
        color = "green"
    else:
        header.append("  no matching documents", style="dim")
        color = "yellow"

    console.print()
    console.print(Panel(answer, title=header, border_style=color, padding=(1, 2)))
